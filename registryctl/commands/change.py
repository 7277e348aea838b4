import logging
import sys
from typing import Optional

import typer

from ..errors import FlagValidationError, RegistryInputError
from ..kube import get_kube_client
from ..registry import (
    FLAG_KEY_FILE,
    FLAG_PASSWORD,
    FLAG_REPOSITORY,
    FLAG_USERNAME,
    FlagValue,
    choose_registry_interactive,
    read_inputs_from_flags,
    read_inputs_interactive,
    set_registry,
    update_configs_secrets,
    validate_flags,
)
from .common import exit_on_error

logger = logging.getLogger("registryctl.change")

app = typer.Typer(help="Change API operator settings")


@app.callback()
def change():
    """Change API operator settings."""


@app.command("registry")
def change_registry(
    registry_type: Optional[str] = typer.Option(
        None, "--registry-type", "-R", help="Registry type (enables batch mode)"
    ),
    repository: Optional[str] = typer.Option(None, "--repository", "-r", help="Repository name"),
    username: Optional[str] = typer.Option(None, "--username", "-u", help="Registry username"),
    password: Optional[str] = typer.Option(None, "--password", "-p", help="Registry password"),
    password_stdin: bool = typer.Option(False, "--password-stdin", help="Read the password from stdin"),
    key_file: Optional[str] = typer.Option(
        None, "--key-file", "-c", help="Credentials file (Amazon ECR) or service account key (GCR)"
    ),
):
    """
    Change the container registry used by the API operator.

    Without flags the registry type and its credentials are asked for
    interactively. With --registry-type everything is taken from flags.
    """
    with exit_on_error():
        if password_stdin:
            if password is not None:
                raise RegistryInputError("--password and --password-stdin are mutually exclusive")
            password = sys.stdin.read().strip()
            if not password:
                raise RegistryInputError("Empty password read from stdin")

        flag_values = {
            FLAG_REPOSITORY: FlagValue(repository, repository is not None),
            FLAG_USERNAME: FlagValue(username, username is not None),
            FLAG_PASSWORD: FlagValue(password, password is not None),
            FLAG_KEY_FILE: FlagValue(key_file, key_file is not None),
        }

        # Cluster credentials are loaded before anything is prompted for
        kube = get_kube_client()

        if registry_type is None:
            provided = sorted(name for name, fv in flag_values.items() if fv.is_provided)
            if provided:
                raise FlagValidationError(
                    f"Flag --registry-type is required in batch mode. Given flags: {', '.join(provided)}",
                    "registry-type",
                )
            selection = choose_registry_interactive()
            read_inputs_interactive(selection)
        else:
            logger.debug(f"Batch mode for registry type {registry_type}")
            selection = set_registry(registry_type)
            validate_flags(selection, flag_values)
            read_inputs_from_flags(selection, flag_values)

        update_configs_secrets(selection, kube)

    typer.echo(f"✅ Registry changed to {selection.registry.caption}: {selection.registry.repository}")
