import typer
from rich.console import Console

from ..config import get_settings
from ..domain.errors import InvalidArgumentError
from ..settings import Settings, EncryptionError
from ..settings.utility import delete_config_value, get_config_value, set_config_value

app = typer.Typer()
console = Console()


def get_config_settings() -> Settings:
    """get settings instance."""
    return get_settings()


@app.command("get")
def get_value(
    key: str,
    decrypt: bool = typer.Option(False, "--decrypt", help="Decrypt a value stored with --encrypt"),
    as_path: bool = typer.Option(False, "--as-path", help="Resolve the value as a path"),
):
    """print a config value."""
    settings = get_config_settings()

    try:
        value = get_config_value(settings, key, decrypt=decrypt, is_path=as_path)
    except (InvalidArgumentError, EncryptionError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if value is None:
        console.print(f"[yellow]'{key}' is not set[/yellow]")
        raise typer.Exit(1)

    console.print(value, markup=False, soft_wrap=True)


@app.command("set")
def set_value(
    key: str,
    value: str,
    encrypt: bool = typer.Option(False, "--encrypt", help="Encrypt the value before storing it"),
):
    """set a config value."""
    settings = get_config_settings()

    try:
        set_config_value(settings, key, value, encrypt=encrypt)
    except InvalidArgumentError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Set '{key}'")


@app.command("delete")
def delete_value(key: str):
    """delete a config value."""
    settings = get_config_settings()

    if not delete_config_value(settings, key):
        console.print(f"[yellow]'{key}' is not set[/yellow]")
        raise typer.Exit(1)

    console.print(f"[green]✓[/green] Deleted '{key}'")
