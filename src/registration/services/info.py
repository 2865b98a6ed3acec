from typing import Any, Dict, List, Optional
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..domain.errors import RegistrationError
from ..domain.models import PackageIdentity
from ..registry.client import RegistryClient
from ..registry.registration import is_listed
from ..versioning import RegistryVersion, VersionRange

def _latest(entries: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
    if not entries:
        return None
    return max(entries, key=lambda e: RegistryVersion.parse(e["version"]))

class InfoService:
    """handles fetching and displaying package information."""

    def __init__(self, registry_client: RegistryClient, console: Optional[Console] = None):
        self.registry_client = registry_client
        self.console = console or Console()

    async def show_versions(
        self,
        package_id: str,
        version_range: VersionRange = VersionRange.ALL,
        include_prerelease: bool = False,
        include_unlisted: bool = False,
    ) -> List[Dict[str, Any]]:
        """
        print a table of the versions of a package matching the filters.

        returns:
            the catalog entries that were printed
        """
        entries = await self.registry_client.get_package_metadata(
            package_id, version_range, include_prerelease, include_unlisted
        )
        if not entries:
            self.console.print(f"[yellow]No versions of '{package_id}' match {version_range}.[/yellow]")
            return []

        entries = sorted(entries, key=lambda e: RegistryVersion.parse(e["version"]))

        table = Table(title=f"{package_id} ({len(entries)} versions)")
        table.add_column("Version", style="bold cyan")
        table.add_column("Published")
        table.add_column("Listed")
        table.add_column("Download")

        for entry in entries:
            table.add_row(
                entry["version"],
                str(entry.get("published", "")),
                "yes" if is_listed(entry) else "[dim]no[/dim]",
                str(entry.get("packageContent", "")),
            )

        self.console.print(table)
        return entries

    async def show_info(self, package_id: str, version: Optional[str] = None) -> Optional[Dict[str, Any]]:
        """
        fetch and display information about a package.

        args:
            package_id: id of the package
            version: optional specific version, latest listed stable when omitted
        """
        try:
            if version:
                entry = await self.registry_client.get_version_metadata(
                    PackageIdentity(id=package_id, version=version)
                )
            else:
                entry = _latest(await self.registry_client.get_package_metadata(
                    package_id, VersionRange.ALL, include_prerelease=False
                ))
                if entry is None:
                    # only prereleases published so far
                    entry = _latest(await self.registry_client.get_package_metadata(
                        package_id, VersionRange.ALL, include_prerelease=True
                    ))
        except (RegistrationError, ValueError) as e:
            self.console.print(f"[red]Error fetching package info:[/red] {e}")
            return None

        if entry is None:
            target = f"{package_id} {version}" if version else package_id
            self.console.print(f"[red]Package '{target}' not found in registry.[/red]")
            return None

        grid = Table.grid(expand=True)
        grid.add_column(style="bold cyan", justify="right")
        grid.add_column(style="white")

        grid.add_row("Id:", str(entry.get("id", package_id)))
        grid.add_row("Version:", entry["version"])
        grid.add_row("Description:", str(entry.get("description") or "No description provided."))

        authors = entry.get("authors")
        if authors:
            grid.add_row("Authors:", authors if isinstance(authors, str) else ", ".join(authors))

        for label, field in (("License:", "licenseUrl"), ("Project:", "projectUrl"), ("Published:", "published")):
            value = entry.get(field)
            if value:
                grid.add_row(label, str(value))

        grid.add_row("Listed:", "yes" if is_listed(entry) else "no")

        if entry.get("packageContent"):
            grid.add_row("Download:", str(entry["packageContent"]))

        self.console.print(Panel(grid, title=f"📦 Package Info: {package_id}", border_style="cyan"))
        return entry
