"""Main entry point for the allauth-login CLI."""

from __future__ import annotations

try:
    import typer
except ImportError:
    import sys

    print("allauth-login CLI requires extras: pip install allauth-login[cli]")
    sys.exit(1)

from .commands import login

app = typer.Typer(
    name="allauth-login",
    help="Log in to a django-allauth backend from the terminal",
    no_args_is_help=True,
)

app.command(name="login")(login.login)


def _version_callback(value: bool) -> None:
    """Handle --version and exit early."""
    if value:
        from allauth_login import __version__

        typer.echo(f"allauth-login {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        help="Show the CLI version and exit.",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """allauth-login CLI root callback."""
    _ = version


@app.command()
def version() -> None:
    """Show the CLI version."""
    from allauth_login import __version__

    typer.echo(f"allauth-login {__version__}")


if __name__ == "__main__":
    app()
