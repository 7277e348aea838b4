import logging
from contextlib import contextmanager

import typer

from ..errors import RegistryError

logger = logging.getLogger("registryctl")


@contextmanager
def exit_on_error():
    """Report a RegistryError to the user and exit with status 1."""
    try:
        yield
    except RegistryError as e:
        logger.debug(f"{type(e).__name__}: {e}", exc_info=True)
        typer.echo(f"❌ Error: {e.message}", err=True)
        if e.hint:
            typer.echo(f"👉 {e.hint}", err=True)
        raise typer.Exit(code=1)
