"""CLI entry point for Lens Catalog."""

import logging
from pathlib import Path
from typing import Annotated, NoReturn

import typer
from rich.console import Console
from rich.logging import RichHandler

from .catalog import CameraNotFoundError, CatalogIndex, LensNotFoundError, RentalNotFoundError
from .catalog_loader import CatalogDecodeError, load_catalog, load_catalog_or_empty
from .config import ConfigManager
from .data_store import BackendType, DataStoreProtocol, create_data_store
from .lens_browser import FormatNotFoundError, LensBrowser
from .models import FilterCriteria, FocalCategory, LensFormatCategory
from .output_formatter import OutputFormatter
from .project_manager import (
    DuplicateEntryError,
    EntryNotFoundError,
    ProjectManager,
    ProjectNotFoundError,
)
from .selection import ComparisonCapacityError
from .selection_manager import SelectionManager

app = typer.Typer(
    name="lenses",
    help="Browse, filter and compare cinema lenses",
    no_args_is_help=True,
)

# Global state for formatter and config (set by callback)
formatter: OutputFormatter = OutputFormatter()
config: ConfigManager | None = None
data_dir: Path | None = None
catalog_dir: Path | None = None
data_store: DataStoreProtocol | None = None
catalog_index: CatalogIndex | None = None

ERROR_CODES: dict[type[Exception], str] = {
    LensNotFoundError: "LENS_NOT_FOUND",
    CameraNotFoundError: "CAMERA_NOT_FOUND",
    RentalNotFoundError: "RENTAL_NOT_FOUND",
    FormatNotFoundError: "FORMAT_NOT_FOUND",
    ComparisonCapacityError: "COMPARISON_FULL",
    ProjectNotFoundError: "PROJECT_NOT_FOUND",
    DuplicateEntryError: "DUPLICATE_ENTRY",
    EntryNotFoundError: "ENTRY_NOT_FOUND",
    CatalogDecodeError: "CATALOG_DECODE_FAILED",
}


def get_config() -> ConfigManager:
    """Get or create ConfigManager instance."""
    global config
    if config is None:
        config = ConfigManager()
    return config


def get_data_store() -> DataStoreProtocol:
    """Get or create the user state store using config values."""
    global data_store
    if data_store is None:
        cfg = get_config()
        backend = BackendType(cfg.data.backend)
        data_store = create_data_store(backend=backend, data_dir=data_dir or cfg.data.storage_dir)
    return data_store


def get_catalog_directory() -> Path:
    """--catalog-dir, then --data-dir, then the configured directory."""
    return catalog_dir or data_dir or get_config().catalog.directory


def get_catalog() -> CatalogIndex:
    """Load and index the catalog on first use.

    An unreadable catalog is logged and treated as empty.
    """
    global catalog_index
    if catalog_index is None:
        cfg = get_config()
        catalog_index = CatalogIndex(
            load_catalog_or_empty(
                get_catalog_directory(), cfg.catalog.lens_file, cfg.catalog.camera_file
            )
        )
    return catalog_index


def fail(e: Exception) -> NoReturn:
    """Report an error and exit with status 1."""
    formatter.error(str(e), error_code=ERROR_CODES.get(type(e)))
    raise typer.Exit(code=1)


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


@app.callback()
def main(
    json_output: Annotated[
        bool, typer.Option("--json", help="Output as JSON for programmatic use")
    ] = False,
    data_dir_option: Annotated[
        Path | None, typer.Option("--data-dir", help="Directory for favorites and projects")
    ] = None,
    catalog_dir_option: Annotated[
        Path | None,
        typer.Option("--catalog-dir", help="Directory holding LENSDATA.json and CAMERADATA.json"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Debug logging")] = False,
) -> None:
    """Lens Catalog CLI - cinema lenses, cameras and rental houses."""
    global formatter, config, data_dir, catalog_dir, data_store, catalog_index

    configure_logging(verbose)
    formatter = OutputFormatter(json_mode=json_output)
    config = ConfigManager()

    # CLI options override config, which overrides default
    data_dir = data_dir_option
    catalog_dir = catalog_dir_option
    data_store = None
    catalog_index = None


@app.command(name="list")
def list_lenses(
    search: Annotated[str, typer.Option("--search", "-s", help="Search name, series or manufacturer")] = "",
    format_tag: Annotated[
        str | None, typer.Option("--format", "-f", help="Exact lens format, e.g. FF")
    ] = None,
    focal: Annotated[
        FocalCategory | None,
        typer.Option("--focal", help="Focal-length category", case_sensitive=False),
    ] = None,
    lens_format: Annotated[
        LensFormatCategory | None,
        typer.Option("--lens-format", help="Lens-format category", case_sensitive=False),
    ] = None,
    manufacturer: Annotated[
        str | None, typer.Option("--manufacturer", "-m", help="Only this manufacturer")
    ] = None,
    rentable: Annotated[bool, typer.Option("--rentable", help="Only lenses stocked by a rental house")] = False,
    rental: Annotated[str | None, typer.Option("--rental", help="Only lenses stocked by this rental")] = None,
    flat: Annotated[bool, typer.Option("--flat", help="Flat list instead of groups")] = False,
) -> None:
    """List lenses grouped by manufacturer and series."""
    try:
        cfg = get_config()
        criteria = FilterCriteria(
            search_text=search,
            format=cfg.defaults.format if format_tag is None else format_tag,
            focal_category=focal or FocalCategory(cfg.defaults.focal_category),
            lens_format_category=lens_format,
            only_rentable=rentable,
            rental_id=rental,
            manufacturer=manufacturer,
        )
        result = LensBrowser(get_catalog()).list_lenses(criteria, flat=flat)
        formatter.output(result)
    except Exception as e:
        fail(e)


@app.command()
def show(
    lens_id: Annotated[str, typer.Argument(help="Lens ID")],
) -> None:
    """Show lens details and where to rent it."""
    try:
        result = LensBrowser(get_catalog()).show_lens(lens_id)
        formatter.output(result)
    except Exception as e:
        fail(e)


@app.command()
def cameras() -> None:
    """List cameras."""
    try:
        formatter.output(LensBrowser(get_catalog()).list_cameras())
    except Exception as e:
        fail(e)


@app.command()
def formats(
    camera_id: Annotated[str, typer.Argument(help="Camera ID")],
) -> None:
    """List the recording formats of a camera."""
    try:
        formatter.output(LensBrowser(get_catalog()).list_formats(camera_id))
    except Exception as e:
        fail(e)


@app.command()
def compat(
    lens_id: Annotated[str, typer.Argument(help="Lens ID")],
    camera_id: Annotated[str, typer.Argument(help="Camera ID")],
    format_id: Annotated[
        str | None, typer.Option("--format", help="Check a single recording format")
    ] = None,
) -> None:
    """Check whether a lens covers a camera's recording formats."""
    try:
        result = LensBrowser(get_catalog()).check_compatibility(lens_id, camera_id, format_id)
        formatter.output(result)
    except Exception as e:
        fail(e)


@app.command()
def rentals() -> None:
    """List rental houses."""
    try:
        formatter.output(LensBrowser(get_catalog()).list_rentals())
    except Exception as e:
        fail(e)


@app.command()
def rental(
    rental_id: Annotated[str, typer.Argument(help="Rental ID")],
    search: Annotated[str, typer.Option("--search", "-s", help="Search within this rental")] = "",
) -> None:
    """List the lenses stocked by a rental house."""
    try:
        result = LensBrowser(get_catalog()).rental_inventory(
            rental_id, FilterCriteria(search_text=search)
        )
        formatter.output(result)
    except Exception as e:
        fail(e)


@app.command()
def info() -> None:
    """Show catalog counts and last update. Fails if the catalog cannot be read."""
    try:
        cfg = get_config()
        catalog = load_catalog(get_catalog_directory(), cfg.catalog.lens_file, cfg.catalog.camera_file)
        formatter.output(LensBrowser(CatalogIndex(catalog)).catalog_summary())
    except Exception as e:
        fail(e)


@app.command()
def favorite(
    lens_id: Annotated[str, typer.Argument(help="Lens ID to add or remove")],
) -> None:
    """Toggle a lens in favorites."""
    try:
        result = SelectionManager(get_catalog(), get_data_store()).toggle_favorite(lens_id)
        formatter.output(result, result["message"])
    except Exception as e:
        fail(e)


@app.command()
def favorites() -> None:
    """List favorite lenses."""
    try:
        formatter.output(SelectionManager(get_catalog(), get_data_store()).get_favorites())
    except Exception as e:
        fail(e)


@app.command()
def compare(
    lens_id: Annotated[str, typer.Argument(help="Lens ID to add or remove")],
) -> None:
    """Toggle a lens in the comparison (up to 4 lenses)."""
    try:
        result = SelectionManager(get_catalog(), get_data_store()).toggle_comparison(lens_id)
        formatter.output(result, result["message"])
    except Exception as e:
        fail(e)


@app.command()
def comparison() -> None:
    """Show the compared lenses side by side."""
    try:
        formatter.output(SelectionManager(get_catalog(), get_data_store()).get_comparison())
    except Exception as e:
        fail(e)


@app.command(name="compare-clear")
def compare_clear() -> None:
    """Remove every lens from the comparison."""
    try:
        result = SelectionManager(get_catalog(), get_data_store()).clear_comparison()
        formatter.success(result["message"], result.get("data"))
    except Exception as e:
        fail(e)


# Project subcommand group
project_app = typer.Typer(help="Project commands")
app.add_typer(project_app, name="project")


def get_project_manager() -> ProjectManager:
    return ProjectManager(get_data_store(), get_catalog())


@project_app.command("create")
def project_create(
    name: Annotated[str | None, typer.Argument(help="Project name")] = None,
    notes: Annotated[str, typer.Option("--notes", "-n", help="Project notes")] = "",
) -> None:
    """Create a project."""
    try:
        result = get_project_manager().create_project(name, notes)
        formatter.output(result, result["message"])
    except Exception as e:
        fail(e)


@project_app.command("list")
def project_list() -> None:
    """List projects, newest first."""
    try:
        formatter.output(get_project_manager().list_projects())
    except Exception as e:
        fail(e)


@project_app.command("show")
def project_show(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
) -> None:
    """Show a project with its lenses and cameras."""
    try:
        formatter.output(get_project_manager().show_project(project_id))
    except Exception as e:
        fail(e)


@project_app.command("update")
def project_update(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    name: Annotated[str | None, typer.Option("--name", help="New name")] = None,
    notes: Annotated[str | None, typer.Option("--notes", "-n", help="New notes")] = None,
) -> None:
    """Rename a project or replace its notes."""
    try:
        result = get_project_manager().update_project(project_id, name=name, notes=notes)
        formatter.output(result, result["message"])
    except Exception as e:
        fail(e)


@project_app.command("delete")
def project_delete(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
) -> None:
    """Delete a project."""
    try:
        result = get_project_manager().delete_project(project_id)
        formatter.success(result["message"], result.get("data"))
    except Exception as e:
        fail(e)


@project_app.command("add-lens")
def project_add_lens(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    lens_id: Annotated[str, typer.Argument(help="Lens ID")],
) -> None:
    """Add a lens to a project."""
    try:
        result = get_project_manager().add_lens(project_id, lens_id)
        formatter.success(result["message"], result.get("data"))
    except Exception as e:
        fail(e)


@project_app.command("remove-lens")
def project_remove_lens(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    lens_id: Annotated[str, typer.Argument(help="Lens ID")],
) -> None:
    """Remove a lens from a project."""
    try:
        result = get_project_manager().remove_lens(project_id, lens_id)
        formatter.success(result["message"], result.get("data"))
    except Exception as e:
        fail(e)


@project_app.command("add-camera")
def project_add_camera(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    camera_id: Annotated[str, typer.Argument(help="Camera ID")],
) -> None:
    """Add a camera to a project."""
    try:
        result = get_project_manager().add_camera(project_id, camera_id)
        formatter.success(result["message"], result.get("data"))
    except Exception as e:
        fail(e)


@project_app.command("remove-camera")
def project_remove_camera(
    project_id: Annotated[str, typer.Argument(help="Project ID")],
    camera_id: Annotated[str, typer.Argument(help="Camera ID")],
) -> None:
    """Remove a camera from a project."""
    try:
        result = get_project_manager().remove_camera(project_id, camera_id)
        formatter.success(result["message"], result.get("data"))
    except Exception as e:
        fail(e)


if __name__ == "__main__":
    app()
