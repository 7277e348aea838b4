"""Interactive prompts used when no flags are given."""
from typing import Optional

import typer

from .errors import InvalidSelectionError, RegistryInputError


def read_option(label: str, minimum: int, maximum: int) -> int:
    """Read a single integer in [minimum, maximum].

    Invalid input is not re-prompted: the caller gets an InvalidSelectionError.
    """
    try:
        raw = typer.prompt(f"{label} [{minimum}-{maximum}]", type=str)
    except typer.Abort as e:
        raise InvalidSelectionError("Error reading registry type: no option entered") from e

    try:
        option = int(raw.strip())
    except ValueError as e:
        raise InvalidSelectionError(f"Error reading registry type: '{raw}' is not a number") from e

    if option < minimum or option > maximum:
        raise InvalidSelectionError(
            f"Error reading registry type: {option} is out of range [{minimum}-{maximum}]"
        )
    return option


def read_value(
    label: str,
    default: Optional[str] = None,
    hide_input: bool = False,
    required: bool = True,
) -> str:
    """Read a string value, asking again while a required value is left blank."""
    while True:
        try:
            value = typer.prompt(
                label,
                default=default if default is not None else "",
                hide_input=hide_input,
                show_default=bool(default) and not hide_input,
            )
        except typer.Abort as e:
            raise RegistryInputError(f"No value entered for: {label}") from e

        value = value.strip()
        if value or not required:
            return value
        typer.echo(f"{label} is required.")
