"""opsx-sync command line interface."""

from __future__ import annotations

import logging

import typer

from opsx_sync.cli.commands import config_path, status, update

app = typer.Typer(
    name="opsx-sync",
    help="Keep generated OPSX skills and commands in sync across AI tools",
    no_args_is_help=True,
)


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log each file read and written"),
) -> None:
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")


app.command()(status)
app.command()(update)
app.command("config-path")(config_path)


def main() -> None:
    app()


__all__ = ["app", "main"]
