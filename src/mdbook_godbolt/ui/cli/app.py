"""Typer application wiring for the mdbook-godbolt CLI."""

from __future__ import annotations

import sys
from typing import Annotated

import typer

from mdbook_godbolt.core.exceptions import GodboltError

from .commands import install_command, preprocess_book, supports
from .state import configure_logging, debug_enabled, emit_error, get_cli_state, set_cli_state


app = typer.Typer(
    help=(
        "mdBook preprocessor that turns godbolt-annotated code blocks into "
        "Compiler Explorer snippets. Without a command, a [context, book] pair "
        "is read from stdin and the processed book is written to stdout."
    ),
    context_settings={"help_option_names": ["--help"]},
    add_completion=False,
    no_args_is_help=False,
)


@app.callback(invoke_without_command=True)
def cli(
    ctx: typer.Context,
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Increase diagnostic output on stderr (repeat for more detail).",
        ),
    ] = 0,
    debug: Annotated[
        bool,
        typer.Option("--debug", help="Show full tracebacks when an error occurs."),
    ] = False,
) -> None:
    state = set_cli_state(ctx=ctx, verbosity=verbose, debug=debug)
    configure_logging(state)
    if ctx.invoked_subcommand is None:
        # mdBook exchanges UTF-8 JSON regardless of the locale encoding.
        preprocess_book(
            getattr(sys.stdin, "buffer", sys.stdin),
            getattr(sys.stdout, "buffer", sys.stdout),
        )


app.command("supports")(supports)
app.command("install")(install_command)


def main() -> None:
    """Entry point compatible with console scripts."""
    try:
        app()
    except SystemExit:
        raise
    except KeyboardInterrupt as exc:
        if debug_enabled():
            raise
        emit_error("Operation cancelled by user.", exception=exc)
        sys.exit(1)
    except GodboltError as exc:
        state = get_cli_state()
        if state.show_tracebacks:
            from rich.traceback import Traceback

            tb = Traceback.from_exception(
                type(exc),
                exc,
                exc.__traceback__,
                show_locals=state.verbosity >= 2,
            )
            state.err_console.print(tb)
        else:
            emit_error(str(exc) or type(exc).__name__, exception=exc)
        sys.exit(1)


__all__ = ["app", "main"]
