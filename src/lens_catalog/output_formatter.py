"""Output formatting for CLI and programmatic use."""

import json
from datetime import date, datetime
from typing import Any
from uuid import UUID

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.tree import Tree


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for output."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)


_VERDICT_STYLES = {
    "full_coverage": "[green]✓ Full coverage[/green]",
    "possible_vignetting": "[red]✗ Possible vignetting[/red]",
    "unknown": "[dim]? Unknown[/dim]",
}


class OutputFormatter:
    """Formats output for both Rich terminal and JSON modes."""

    def __init__(self, json_mode: bool = False):
        """Initialize formatter.

        Args:
            json_mode: If True, output JSON instead of Rich formatting
        """
        self.json_mode = json_mode
        self.console = Console()

    def output(self, data: dict[str, Any], message: str = "") -> None:
        """Output data in appropriate format.

        Args:
            data: Data to output
            message: Optional message for Rich mode
        """
        if self.json_mode:
            self._output_json(data)
        else:
            self._output_rich(data, message)

    def _output_json(self, data: dict[str, Any]) -> None:
        """Output as JSON to stdout."""
        print(json.dumps(data, cls=JSONEncoder, indent=2))

    def _output_rich(self, data: dict[str, Any], message: str) -> None:
        """Output with Rich formatting."""
        if message:
            self.console.print(f"[green]✓[/green] {message}")

        payload = data.get("data", {})
        if "summary" in payload:
            self._render_summary(data)
        elif "groups" in payload:
            self._render_groups(data)
        elif "lens" in payload and "rentals" in payload:
            self._render_lens(data)
        elif "compatibility" in payload:
            self._render_camera_report(data)
        elif "verdict" in payload:
            self._render_verdict(data)
        elif "lenses" in payload and "project" not in payload:
            self._render_lens_table(payload["lenses"], "Lenses")
        elif "favorites" in payload:
            self._render_lens_table(payload["favorites"], "Favorites")
        elif "comparison" in payload:
            self._render_comparison(data)
        elif "cameras" in payload and "project" not in payload:
            self._render_cameras(data)
        elif "formats" in payload:
            self._render_formats(data)
        elif "rentals" in payload:
            self._render_rentals(data)
        elif "projects" in payload:
            self._render_projects(data)
        elif "project" in payload:
            self._render_project(data)

    def _render_summary(self, data: dict) -> None:
        summary = data["data"]["summary"]
        content = f"""Lenses: {summary["lenses"]} ({summary["rentable_lenses"]} rentable)
Cameras: {summary["cameras"]} ({summary["recording_formats"]} recording formats)
Rental houses: {summary["rentals"]}
Lens formats: {", ".join(summary["formats"]) or "-"}
Last updated: {summary["last_updated"] or "unknown"}"""
        self.console.print(Panel(content, title="Catalog", border_style="cyan"))

    def _render_groups(self, data: dict) -> None:
        """Render manufacturer -> series -> lens groups as a tree."""
        payload = data["data"]
        groups = payload["groups"]

        title = "Lenses"
        if payload.get("rental"):
            title = f"Lenses at {payload['rental']['name']}"

        if not groups:
            self.console.print("[dim]No lenses match[/dim]")
            return

        tree = Tree(f"[bold]{title}[/bold]")
        for group in groups:
            manufacturer = tree.add(f"[bold cyan]{group['manufacturer']}[/bold cyan]")
            for series in group["series"]:
                branch = manufacturer.add(f"[yellow]{series['name'] or '-'}[/yellow]")
                for lens in series["lenses"]:
                    branch.add(
                        f"{lens['display_name']} [dim]{lens['format']} "
                        f"{lens['aperture']} ({lens['id']})[/dim]"
                    )

        self.console.print(tree)
        self.console.print(f"\nTotal lenses: {payload['total_items']}")

    def _render_lens_table(self, lenses: list[dict], title: str) -> None:
        """Render a flat lens list."""
        if not lenses:
            self.console.print(f"[dim]No lenses in {title.lower()}[/dim]")
            return

        table = Table(title=title, show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Lens", style="cyan")
        table.add_column("Manufacturer", style="green")
        table.add_column("Format", style="yellow")
        table.add_column("Focal", justify="right")
        table.add_column("Aperture", justify="right")

        for lens in lenses:
            table.add_row(
                lens["id"],
                lens["display_name"],
                lens["manufacturer"],
                lens["format"] or "-",
                lens["focal_length"] or "-",
                lens["aperture"] or "-",
            )

        self.console.print(table)
        self.console.print(f"\nTotal lenses: {len(lenses)}")

    def _render_lens(self, data: dict) -> None:
        """Render lens details with Rich."""
        payload = data["data"]
        lens = payload["lens"]

        content = f"""[bold]{lens["display_name"]}[/bold]

Manufacturer: {lens["manufacturer"]}
Series: {lens["series_name"] or "-"}
Format: {lens["format"] or "-"} ({payload["lens_format_category"]})
Focal length: {lens["focal_length"] or "-"} ({payload["focal_category"]})
Aperture: {lens["aperture"] or "-"}
Close focus: {lens["close_focus_cm"] or "-"} cm / {lens["close_focus_in"] or "-"} in
Image circle: {lens["image_circle"] or "-"}
Length: {lens["length"] or "-"}
Front diameter: {lens["front_diameter"] or "-"}"""

        if lens.get("squeeze_factor"):
            content += f"\nSqueeze: {lens['squeeze_factor']}"

        self.console.print(Panel(content, title="Lens Details", border_style="green"))

        rentals = payload["rentals"]
        if rentals:
            self.console.print("\n[bold]Available at[/bold]")
            for rental in rentals:
                self.console.print(f"  • {rental['name']} [dim]{rental['phone']}[/dim]")
        else:
            self.console.print("\n[dim]Not stocked by any rental house[/dim]")

    def _verdict_text(self, verdict: dict) -> str:
        return _VERDICT_STYLES.get(verdict["status"], verdict["status"])

    def _render_verdict(self, data: dict) -> None:
        """Render a single-format compatibility verdict."""
        payload = data["data"]
        verdict = payload["verdict"]
        camera = payload["camera"]
        self.console.print(
            Panel(
                f"""[bold]{payload["lens"]["display_name"]}[/bold] on {camera["manufacturer"]} {camera["model"]}
Format: {payload["format"]["name"]}

{self._verdict_text(verdict)}
{verdict["reason"]}""",
                title="Compatibility",
                border_style="cyan",
            )
        )

    def _render_camera_report(self, data: dict) -> None:
        """Render coverage across a camera's sensor and recording formats."""
        payload = data["data"]
        report = payload["compatibility"]
        camera = payload["camera"]

        table = Table(
            title=f"{payload['lens']['display_name']} on {camera['manufacturer']} {camera['model']}",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("Area", style="cyan")
        table.add_column("Diagonal", justify="right")
        table.add_column("Image circle", justify="right")
        table.add_column("Verdict")

        def row(name: str, verdict: dict) -> None:
            diagonal = verdict.get("diagonal_mm")
            circle = verdict.get("image_circle_mm")
            table.add_row(
                name,
                f"{diagonal:.1f}mm" if diagonal is not None else "-",
                f"{circle:.1f}mm" if circle is not None else "-",
                self._verdict_text(verdict),
            )

        row("Sensor", report["sensor"])
        for fmt in report["formats"]:
            row(fmt["format_name"], fmt["verdict"])

        self.console.print(table)

    def _render_comparison(self, data: dict) -> None:
        """Render compared lenses side by side."""
        payload = data["data"]
        lenses = payload["comparison"]

        if not lenses:
            self.console.print("[dim]No lenses in comparison[/dim]")
            return

        table = Table(title="Comparison", show_header=True, header_style="bold cyan")
        table.add_column("", style="bold")
        for lens in lenses:
            table.add_column(lens["display_name"])

        for label, key in (
            ("Manufacturer", "manufacturer"),
            ("Format", "format"),
            ("Focal length", "focal_length"),
            ("Aperture", "aperture"),
            ("Close focus (cm)", "close_focus_cm"),
            ("Image circle", "image_circle"),
            ("Length", "length"),
            ("Front diameter", "front_diameter"),
            ("Squeeze", "squeeze_factor"),
        ):
            table.add_row(label, *[lens.get(key) or "-" for lens in lenses])

        self.console.print(table)
        self.console.print(f"\n{len(lenses)}/{payload['capacity']} slots used")

    def _render_cameras(self, data: dict) -> None:
        cameras = data["data"]["cameras"]
        if not cameras:
            self.console.print("[dim]No cameras in catalog[/dim]")
            return

        table = Table(title="Cameras", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Manufacturer", style="green")
        table.add_column("Model", style="cyan")
        table.add_column("Sensor")
        table.add_column("Size", justify="right")
        table.add_column("Image circle", justify="right")

        for camera in cameras:
            table.add_row(
                camera["id"],
                camera["manufacturer"],
                camera["model"],
                camera["sensor_type"] or "-",
                f"{camera['sensor_width']} x {camera['sensor_height']}",
                camera["image_circle"] or "-",
            )

        self.console.print(table)

    def _render_formats(self, data: dict) -> None:
        payload = data["data"]
        camera = payload["camera"]
        formats = payload["formats"]

        if not formats:
            self.console.print(f"[dim]No recording formats for {camera['model']}[/dim]")
            return

        table = Table(
            title=f"{camera['manufacturer']} {camera['model']} recording formats",
            show_header=True,
            header_style="bold cyan",
        )
        table.add_column("ID", style="dim")
        table.add_column("Format", style="cyan")
        table.add_column("Width", justify="right")
        table.add_column("Height", justify="right")
        table.add_column("Image circle", justify="right")

        for fmt in formats:
            table.add_row(
                fmt["id"],
                fmt["name"],
                fmt["recording_width"] or "-",
                fmt["recording_height"] or "-",
                fmt["recording_image_circle"] or "-",
            )

        self.console.print(table)

    def _render_rentals(self, data: dict) -> None:
        rentals = data["data"]["rentals"]
        if not rentals:
            self.console.print("[dim]No rental houses in catalog[/dim]")
            return

        table = Table(title="Rental Houses", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Address")
        table.add_column("Phone", style="green")
        table.add_column("Website", style="blue")

        for rental in rentals:
            table.add_row(
                rental["id"], rental["name"], rental["address"], rental["phone"], rental["website"]
            )

        self.console.print(table)

    def _render_projects(self, data: dict) -> None:
        projects = data["data"]["projects"]
        if not projects:
            self.console.print("[dim]No projects yet[/dim]")
            return

        table = Table(title="Projects", show_header=True, header_style="bold cyan")
        table.add_column("ID", style="dim")
        table.add_column("Name", style="cyan")
        table.add_column("Date")
        table.add_column("Lenses", justify="right")
        table.add_column("Cameras", justify="right")

        for project in projects:
            table.add_row(
                project["id"],
                project["name"],
                project["date"][:10],
                str(len(project["lens_ids"])),
                str(len(project["camera_ids"])),
            )

        self.console.print(table)

    def _render_project(self, data: dict) -> None:
        payload = data["data"]
        project = payload["project"]

        content = f"[bold]{project['name']}[/bold]\n\nDate: {project['date'][:10]}"
        if project["notes"]:
            content += f"\nNotes: {project['notes']}"
        self.console.print(Panel(content, title="Project", border_style="green"))

        lenses = payload.get("lenses")
        if lenses is not None:
            self._render_lens_table(lenses, "Project Lenses")
        cameras = payload.get("cameras")
        if cameras:
            for camera in cameras:
                self.console.print(f"  • {camera['manufacturer']} {camera['model']}")

    def error(self, message: str, error_code: str | None = None) -> None:
        """Output error message.

        Args:
            message: Error message
            error_code: Optional error code
        """
        if self.json_mode:
            output = {"success": False, "error": message}
            if error_code:
                output["error_code"] = error_code
            print(json.dumps(output))
        else:
            self.console.print(f"[red]✗ Error:[/red] {message}")

    def success(self, message: str, data: dict | None = None) -> None:
        """Output success message.

        Args:
            message: Success message
            data: Optional data to include
        """
        if self.json_mode:
            output: dict[str, Any] = {"success": True, "message": message}
            if data:
                output["data"] = data
            print(json.dumps(output, cls=JSONEncoder))
        else:
            self.console.print(f"[green]✓[/green] {message}")
