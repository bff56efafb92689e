"""Read-only catalog operations: listing, lookup, rentals and compatibility."""

from .catalog import CatalogIndex
from .classifiers import classify_focal, classify_lens_format
from .compatibility import camera_report, check_format
from .filtering import filter_lenses
from .grouping import group_lenses
from .models import FilterCriteria, LensGroup


class FormatNotFoundError(Exception):
    """Raised when a recording format is not found for a camera."""

    def __init__(self, camera_id: str, format_id: str):
        self.camera_id = camera_id
        self.format_id = format_id
        super().__init__(f"Recording format '{format_id}' not found for camera '{camera_id}'")


def _dump_groups(groups: list[LensGroup]) -> list[dict]:
    return [group.model_dump(mode="json") for group in groups]


class LensBrowser:
    """Browses a loaded catalog."""

    def __init__(self, catalog: CatalogIndex):
        """Initialize lens browser.

        Args:
            catalog: Index of the loaded catalog
        """
        self.catalog = catalog

    def catalog_summary(self) -> dict:
        """Record counts, last update and the lens format tags in use."""
        catalog = self.catalog.catalog
        return {
            "success": True,
            "data": {
                "summary": {
                    "last_updated": catalog.last_updated,
                    "lenses": len(catalog.lenses),
                    "cameras": len(catalog.cameras),
                    "recording_formats": len(catalog.recording_formats),
                    "rentals": len(catalog.rentals),
                    "rentable_lenses": len(self.catalog.rentable_lens_ids()),
                    "formats": self.catalog.available_formats(),
                }
            },
        }

    def list_lenses(self, criteria: FilterCriteria | None = None, flat: bool = False) -> dict:
        """Filter the catalog's lenses and group them by manufacturer and series.

        Args:
            criteria: Active filters. None keeps every lens.
            flat: Return a flat, name-sorted list instead of groups

        Returns:
            Dict with groups (or lenses) and the matching lens count
        """
        lenses = filter_lenses(self.catalog.lenses, criteria, self.catalog.catalog.inventory)

        if flat:
            lenses = sorted(lenses, key=lambda lens: (lens.display_name, lens.id))
            return {
                "success": True,
                "data": {
                    "lenses": [lens.model_dump(mode="json") for lens in lenses],
                    "total_items": len(lenses),
                },
            }

        return {
            "success": True,
            "data": {
                "groups": _dump_groups(group_lenses(lenses)),
                "total_items": len(lenses),
            },
        }

    def show_lens(self, lens_id: str) -> dict:
        """Get one lens with its derived categories and the rentals stocking it.

        Raises:
            LensNotFoundError: If lens not found
        """
        lens = self.catalog.get_lens(lens_id)
        focal = lens.main_focal
        return {
            "success": True,
            "data": {
                "lens": lens.model_dump(mode="json"),
                "main_focal_mm": focal,
                "image_circle_mm": lens.image_circle_mm,
                "focal_category": classify_focal(focal).value,
                "lens_format_category": classify_lens_format(lens.lens_format).value,
                "rentals": [r.model_dump(mode="json") for r in self.catalog.rentals_for_lens(lens.id)],
            },
        }

    def list_cameras(self) -> dict:
        return {
            "success": True,
            "data": {
                "cameras": [c.model_dump(mode="json") for c in self.catalog.cameras],
                "total_items": len(self.catalog.cameras),
            },
        }

    def list_formats(self, camera_id: str) -> dict:
        """List the recording formats of a camera.

        Raises:
            CameraNotFoundError: If camera not found
        """
        camera = self.catalog.get_camera(camera_id)
        formats = self.catalog.formats_for_camera(camera.id)
        return {
            "success": True,
            "data": {
                "camera": camera.model_dump(mode="json"),
                "formats": [f.model_dump(mode="json") for f in formats],
            },
        }

    def check_compatibility(
        self, lens_id: str, camera_id: str, format_id: str | None = None
    ) -> dict:
        """Check lens coverage on a camera, or on one of its recording formats.

        Raises:
            LensNotFoundError: If lens not found
            CameraNotFoundError: If camera not found
            FormatNotFoundError: If format_id is not a format of this camera
        """
        lens = self.catalog.get_lens(lens_id)
        camera = self.catalog.get_camera(camera_id)
        formats = self.catalog.formats_for_camera(camera.id)

        if format_id is not None:
            selected = next((f for f in formats if f.id == format_id), None)
            if selected is None:
                raise FormatNotFoundError(camera_id, format_id)
            verdict = check_format(lens, selected)
            return {
                "success": True,
                "data": {
                    "verdict": verdict.model_dump(mode="json"),
                    "lens": lens.model_dump(mode="json"),
                    "camera": camera.model_dump(mode="json"),
                    "format": selected.model_dump(mode="json"),
                },
            }

        report = camera_report(lens, camera, formats)
        return {
            "success": True,
            "data": {
                "compatibility": report.model_dump(mode="json"),
                "lens": lens.model_dump(mode="json"),
                "camera": camera.model_dump(mode="json"),
            },
        }

    def list_rentals(self) -> dict:
        return {
            "success": True,
            "data": {
                "rentals": [r.model_dump(mode="json") for r in self.catalog.rentals],
                "total_items": len(self.catalog.rentals),
            },
        }

    def rental_inventory(self, rental_id: str, criteria: FilterCriteria | None = None) -> dict:
        """Grouped lenses stocked by one rental house.

        Raises:
            RentalNotFoundError: If rental not found
        """
        rental = self.catalog.get_rental(rental_id)
        criteria = (criteria or FilterCriteria()).model_copy(update={"rental_id": rental.id})
        lenses = filter_lenses(self.catalog.lenses, criteria, self.catalog.catalog.inventory)
        return {
            "success": True,
            "data": {
                "rental": rental.model_dump(mode="json"),
                "groups": _dump_groups(group_lenses(lenses)),
                "total_items": len(lenses),
            },
        }
