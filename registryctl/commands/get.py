import typer

from ..registries import catalog

app = typer.Typer(help="Show registry information")


@app.callback()
def get():
    """Show registry information."""


@app.command("registries")
def get_registries():
    """List the supported registry types and their batch mode flags."""
    typer.echo(f"{'OPTION':<8}{'NAME':<14}{'CAPTION':<28}{'REQUIRED FLAGS':<34}OPTIONAL FLAGS")
    for registry in catalog:
        required = ", ".join(sorted(registry.required_flags)) or "-"
        optional = ", ".join(sorted(registry.optional_flags)) or "-"
        typer.echo(f"{registry.option:<8}{registry.name:<14}{registry.caption:<28}{required:<34}{optional}")
