from vault_deployment.confirm import DeploymentAborted
from vault_deployment.constants import EXIT_FAILURE, EXIT_SUCCESS
from vault_deployment.runner import execute


def test_execute_success(capsys):
    calls = []
    status = execute(lambda: calls.append("ran"))

    assert status == EXIT_SUCCESS == 0
    assert calls == ["ran"]
    assert capsys.readouterr().err == ""


def test_execute_failure_reports_on_stderr(capsys):
    def task():
        raise ConnectionError("RPC endpoint unreachable")

    status = execute(task)

    assert status == EXIT_FAILURE == 1
    captured = capsys.readouterr()
    assert "ConnectionError: RPC endpoint unreachable" in captured.err
    assert captured.out == ""


def test_execute_treats_all_errors_alike(capsys):
    errors = [ValueError("bad argument"), RuntimeError("reverted"), DeploymentAborted("no")]
    for error in errors:

        def task(error=error):
            raise error

        assert execute(task) == EXIT_FAILURE

    err = capsys.readouterr().err
    assert "ValueError: bad argument" in err
    assert "RuntimeError: reverted" in err
    assert "DeploymentAborted: no" in err
