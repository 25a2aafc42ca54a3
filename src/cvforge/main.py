import logging
from importlib.metadata import version as pkg_version
from typing import Optional

import typer

from cvforge.cli.generate_cmd import generate_command
from cvforge.cli.serve_cmd import serve_command

app = typer.Typer(
    name="cvforge",
    help="Render résumés to HTML, PDF and DOCX.",
    no_args_is_help=True,
    invoke_without_command=True,
)

app.command("generate")(generate_command)
app.command("serve")(serve_command)


def version_callback(value: bool):
    if value:
        typer.echo(f"cvforge {pkg_version('cvforge')}")
        raise typer.Exit()


@app.callback()
def main(
    version: Optional[bool] = typer.Option(
        None, "--version", "-v", callback=version_callback, is_eager=True,
        help="Show version and exit.",
    ),
    debug: bool = typer.Option(
        False, "--debug", help="Enable debug logging.",
    ),
):
    """Render résumés to HTML, PDF and DOCX."""
    level = logging.DEBUG if debug else logging.WARNING
    logging.basicConfig(level=logging.WARNING, format="%(name)s %(levelname)s: %(message)s")
    logging.getLogger("cvforge").setLevel(level)


if __name__ == "__main__":
    app()
