from pathlib import Path

import click

autosign_option = click.option(
    "--auto",
    help="Automatically sign transactions.",
    is_flag=True,
)

verify_option = click.option(
    "--verify",
    help="Publish contract sources to the network's block explorer.",
    is_flag=True,
)


def registry_filepath_option(default=None, exists: bool = False, help: str = "Registry filepath"):
    return click.option(
        "--registry-filepath",
        "-f",
        help=help,
        type=click.Path(dir_okay=False, exists=exists, path_type=Path),
        default=default,
        show_default=default is not None,
        required=False,
    )


params_file_option = click.option(
    "--params-file",
    "-p",
    help="YAML file with vault constructor parameters; overrides the individual options.",
    type=click.Path(dir_okay=False, exists=True, path_type=Path),
    required=False,
)
