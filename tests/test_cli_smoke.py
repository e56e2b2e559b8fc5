from typer.testing import CliRunner
from mdpost.cli.cli import app

def test_cli_smoke():
    runner = CliRunner()
    result = runner.invoke(app, ["--help"])
    assert result.exit_code == 0
    for command in ("new", "publish", "render"):
        assert command in result.output
