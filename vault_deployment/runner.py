from typing import Any, Callable

import click

from vault_deployment.constants import EXIT_FAILURE, EXIT_SUCCESS


def execute(task: Callable[[], Any]) -> int:
    """
    Runs a deployment task and maps its outcome to a process exit status.
    Every error is reported on stderr and treated alike; nothing is retried.
    """
    try:
        task()
    except Exception as error:
        click.echo(f"{type(error).__name__}: {error}", err=True)
        return EXIT_FAILURE
    return EXIT_SUCCESS
