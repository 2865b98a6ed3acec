import asyncio
import logging
from typing import Optional

import typer
from rich.console import Console

from ..config import get_registry_url, get_settings
from ..domain.errors import RegistrationError
from ..registry.registration import RegistrationResource
from ..registry.transport import HttpxTransport
from ..registry.uris import RegistrationUris
from ..services.info import InfoService
from ..versioning import VersionRange
from .config_commands import app as config_app

app = typer.Typer()
console = Console()

# add config subcommand
app.add_typer(config_app, name="config", help="Manage registration settings")

def get_info_service(transport: HttpxTransport, source: Optional[str] = None) -> InfoService:
    registry_client = RegistrationResource(transport, source or get_registry_url(get_settings()))
    return InfoService(registry_client, console)

@app.callback()
def main_callback(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging")):
    """query package registration metadata from a registry."""
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

@app.command()
def metadata(
    package_id: str,
    version_range: Optional[str] = typer.Option(None, "--range", "-r", help="Version range, e.g. [1.0,2.0)"),
    prerelease: bool = typer.Option(False, "--prerelease", help="Include prerelease versions"),
    unlisted: bool = typer.Option(False, "--unlisted", help="Include unlisted versions"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Registration base URL"),
):
    """list versions of a package matching the filters."""
    try:
        parsed_range = VersionRange.parse(version_range) if version_range else VersionRange.ALL
    except ValueError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    async def run():
        async with HttpxTransport() as transport:
            service = get_info_service(transport, source)
            return await service.show_versions(package_id, parsed_range, prerelease, unlisted)

    try:
        asyncio.run(run())
    except RegistrationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

@app.command()
def info(
    package_id: str,
    version: Optional[str] = typer.Option(None, "--version", help="Specific version, latest when omitted"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Registration base URL"),
):
    """show information about a package."""
    async def run():
        async with HttpxTransport() as transport:
            service = get_info_service(transport, source)
            return await service.show_info(package_id, version)

    entry = asyncio.run(run())
    if entry is None:
        raise typer.Exit(1)

@app.command()
def uri(
    package_id: str,
    version: Optional[str] = typer.Option(None, "--version", help="Version blob instead of the index"),
    source: Optional[str] = typer.Option(None, "--source", "-s", help="Registration base URL"),
):
    """print the registration URI of a package or package version."""
    uris = RegistrationUris(source or get_registry_url(get_settings()))
    try:
        if version:
            console.print(uris.get_version_uri(package_id, version), soft_wrap=True)
        else:
            console.print(uris.get_index_uri(package_id), soft_wrap=True)
    except RegistrationError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

if __name__ == "__main__":
    app()
