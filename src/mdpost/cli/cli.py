"""CLI entrypoint: Typer app definition and command registration"""

import typer

from mdpost.cli.commands import main_callback, new_cmd, publish_cmd, render_cmd


app = typer.Typer(name="mdpost", no_args_is_help=True, help="Create, publish and render site posts")

app.callback()(main_callback)
app.command(name="new")(new_cmd)
app.command(name="publish")(publish_cmd)
app.command(name="render")(render_cmd)
