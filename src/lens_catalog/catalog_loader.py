"""Decode catalog payloads into a Catalog.

This is the only place raw JSON is handled. Field-name variants and
heterogeneous scalar types are resolved here by the models, records that
cannot be used are dropped with a warning, and everything past this module
works on typed, string-valued records.

Expected payloads:
    lens file:   {"last_updated": ..., "rentals": [...], "lenses": [...],
                  "inventory": {rental_id: [{"lens_id": ...}]} | [{"rental_id", "lens_id", ...}]}
    camera file: {"camera": [...], "formats": [...]}
"""

import json
import logging
from pathlib import Path
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from .models import Camera, Catalog, InventoryItem, Lens, RecordingFormat, Rental

logger = logging.getLogger(__name__)

DEFAULT_LENS_FILE = "LENSDATA.json"
DEFAULT_CAMERA_FILE = "CAMERADATA.json"

RecordT = TypeVar("RecordT", bound=BaseModel)


class CatalogDecodeError(Exception):
    """Raised when a catalog file is missing or cannot be decoded."""

    def __init__(self, path: Path | str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Could not load catalog file '{path}': {reason}")


def _decode_records(
    model: type[RecordT], raw_records: Any, label: str
) -> list[RecordT]:
    """Validate each raw record, dropping the ones that fail."""
    if raw_records is None:
        return []
    if not isinstance(raw_records, list):
        raise ValueError(f"'{label}' must be a list")

    records = []
    for position, raw in enumerate(raw_records):
        if not isinstance(raw, dict):
            logger.warning("Dropping %s #%d: not an object", label, position)
            continue
        try:
            records.append(model.model_validate(raw))
        except ValidationError as e:
            logger.warning(
                "Dropping %s #%d: %d validation error(s)", label, position, e.error_count()
            )
    return records


def decode_inventory(raw_inventory: Any) -> list[InventoryItem]:
    """Decode inventory in either the mapping or the flat-list form."""
    if raw_inventory is None:
        return []
    if isinstance(raw_inventory, dict):
        flattened = []
        for rental_id, items in raw_inventory.items():
            if not isinstance(items, list):
                logger.warning("Dropping inventory for rental '%s': not a list", rental_id)
                continue
            for item in items:
                if isinstance(item, dict):
                    flattened.append({**item, "rental_id": rental_id})
        raw_inventory = flattened

    items = _decode_records(InventoryItem, raw_inventory, "inventory item")
    return [item for item in items if item.rental_id and item.lens_id]


def decode_lens_payload(data: Any) -> dict[str, Any]:
    """Decode the lens payload into lenses, rentals and inventory.

    Lenses with an empty id are dropped.

    Raises:
        ValueError: If the payload is not shaped like a lens payload
    """
    if not isinstance(data, dict):
        raise ValueError("lens payload must be a JSON object")

    lenses = _decode_records(Lens, data.get("lenses"), "lens")
    kept = [lens for lens in lenses if lens.id]
    if len(kept) != len(lenses):
        logger.warning("Dropped %d lens(es) with an empty id", len(lenses) - len(kept))

    last_updated = data.get("last_updated")
    return {
        "lenses": kept,
        "rentals": _decode_records(Rental, data.get("rentals"), "rental"),
        "inventory": decode_inventory(data.get("inventory")),
        "last_updated": str(last_updated) if last_updated is not None else None,
    }


def decode_camera_payload(data: Any) -> dict[str, Any]:
    """Decode the camera payload into cameras and recording formats.

    Raises:
        ValueError: If the payload is not shaped like a camera payload
    """
    if not isinstance(data, dict):
        raise ValueError("camera payload must be a JSON object")

    cameras = _decode_records(Camera, data.get("camera", data.get("cameras")), "camera")
    cameras.sort(key=lambda c: (c.manufacturer, c.model))
    return {
        "cameras": cameras,
        "recording_formats": _decode_records(
            RecordingFormat, data.get("formats"), "recording format"
        ),
    }


def _read_json(path: Path) -> Any:
    if not path.exists():
        raise CatalogDecodeError(path, "file not found")
    try:
        with open(path, encoding="utf-8") as f:
            return json.load(f)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise CatalogDecodeError(path, str(e)) from e


def load_catalog(
    directory: Path,
    lens_file: str = DEFAULT_LENS_FILE,
    camera_file: str = DEFAULT_CAMERA_FILE,
) -> Catalog:
    """Load a catalog from the lens and camera files in a directory.

    The camera file is optional; without it the catalog has no cameras.

    Args:
        directory: Directory holding the catalog files
        lens_file: Lens payload file name
        camera_file: Camera payload file name

    Returns:
        Catalog

    Raises:
        CatalogDecodeError: If the lens file is missing, or either file
            cannot be decoded
    """
    lens_path = directory / lens_file
    try:
        lens_parts = decode_lens_payload(_read_json(lens_path))
    except ValueError as e:
        raise CatalogDecodeError(lens_path, str(e)) from e

    camera_path = directory / camera_file
    camera_parts: dict[str, Any] = {}
    if camera_path.exists():
        try:
            camera_parts = decode_camera_payload(_read_json(camera_path))
        except ValueError as e:
            raise CatalogDecodeError(camera_path, str(e)) from e
    else:
        logger.info("No camera file at %s; loading lenses only", camera_path)

    catalog = Catalog(**lens_parts, **camera_parts)
    logger.info(
        "Loaded %d lenses, %d cameras, %d rentals from %s",
        len(catalog.lenses),
        len(catalog.cameras),
        len(catalog.rentals),
        directory,
    )
    return catalog


def load_catalog_or_empty(
    directory: Path,
    lens_file: str = DEFAULT_LENS_FILE,
    camera_file: str = DEFAULT_CAMERA_FILE,
) -> Catalog:
    """Like load_catalog, but an unreadable catalog becomes an empty one."""
    try:
        return load_catalog(directory, lens_file, camera_file)
    except CatalogDecodeError as e:
        logger.error("%s", e)
        return Catalog()
