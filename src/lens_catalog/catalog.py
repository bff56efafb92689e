"""Lookups over a loaded catalog snapshot."""

import logging
from collections import defaultdict
from collections.abc import Iterable

from .models import Camera, Catalog, Lens, RecordingFormat, Rental

logger = logging.getLogger(__name__)


class LensNotFoundError(Exception):
    """Raised when a lens id is not in the catalog."""

    def __init__(self, lens_id: str):
        self.lens_id = lens_id
        super().__init__(f"Lens with ID '{lens_id}' not found")


class CameraNotFoundError(Exception):
    """Raised when a camera id is not in the catalog."""

    def __init__(self, camera_id: str):
        self.camera_id = camera_id
        super().__init__(f"Camera with ID '{camera_id}' not found")


class RentalNotFoundError(Exception):
    """Raised when a rental id is not in the catalog."""

    def __init__(self, rental_id: str):
        self.rental_id = rental_id
        super().__init__(f"Rental with ID '{rental_id}' not found")


class CatalogIndex:
    """Id-keyed access to a catalog, built once per snapshot."""

    def __init__(self, catalog: Catalog | None = None):
        """Index a catalog.

        Args:
            catalog: Catalog snapshot. None is treated as an empty catalog.
        """
        self.catalog = catalog or Catalog()
        self._lenses = {lens.id: lens for lens in self.catalog.lenses}
        self._cameras = {camera.id: camera for camera in self.catalog.cameras}
        self._rentals = {rental.id: rental for rental in self.catalog.rentals}

        self._lenses_by_rental: dict[str, set[str]] = defaultdict(set)
        self._rentals_by_lens: dict[str, set[str]] = defaultdict(set)
        for item in self.catalog.inventory:
            self._lenses_by_rental[item.rental_id].add(item.lens_id)
            self._rentals_by_lens[item.lens_id].add(item.rental_id)

        self._formats_by_camera: dict[str, list[RecordingFormat]] = defaultdict(list)
        for fmt in self.catalog.recording_formats:
            self._formats_by_camera[fmt.camera_id].append(fmt)

    @property
    def lenses(self) -> list[Lens]:
        return self.catalog.lenses

    @property
    def cameras(self) -> list[Camera]:
        return self.catalog.cameras

    @property
    def rentals(self) -> list[Rental]:
        return self.catalog.rentals

    def find_lens(self, lens_id: str) -> Lens | None:
        return self._lenses.get(lens_id)

    def get_lens(self, lens_id: str) -> Lens:
        """Get a lens by id.

        Raises:
            LensNotFoundError: If no lens has this id
        """
        lens = self._lenses.get(lens_id)
        if lens is None:
            raise LensNotFoundError(lens_id)
        return lens

    def find_camera(self, camera_id: str) -> Camera | None:
        return self._cameras.get(camera_id)

    def get_camera(self, camera_id: str) -> Camera:
        camera = self._cameras.get(camera_id)
        if camera is None:
            raise CameraNotFoundError(camera_id)
        return camera

    def get_rental(self, rental_id: str) -> Rental:
        rental = self._rentals.get(rental_id)
        if rental is None:
            raise RentalNotFoundError(rental_id)
        return rental

    def resolve_lenses(self, lens_ids: Iterable[str]) -> list[Lens]:
        """Resolve ids to lenses in the given order, skipping ids no longer in the catalog."""
        resolved = []
        missing = []
        for lens_id in lens_ids:
            lens = self._lenses.get(lens_id)
            if lens is None:
                missing.append(lens_id)
            else:
                resolved.append(lens)
        if missing:
            logger.debug("Skipping %d stale lens id(s): %s", len(missing), ", ".join(missing))
        return resolved

    def rentable_lens_ids(self) -> set[str]:
        return set(self._rentals_by_lens)

    def lenses_for_rental(self, rental_id: str) -> list[Lens]:
        """Lenses stocked by a rental house, in catalog order."""
        stocked = self._lenses_by_rental.get(rental_id, set())
        return [lens for lens in self.catalog.lenses if lens.id in stocked]

    def rentals_for_lens(self, lens_id: str) -> list[Rental]:
        """Rental houses stocking a lens, in catalog order."""
        stocking = self._rentals_by_lens.get(lens_id, set())
        return [rental for rental in self.catalog.rentals if rental.id in stocking]

    def formats_for_camera(self, camera_id: str) -> list[RecordingFormat]:
        return list(self._formats_by_camera.get(camera_id, []))

    def available_formats(self) -> list[str]:
        """Distinct non-empty lens format tags, sorted."""
        return sorted({lens.format for lens in self.catalog.lenses if lens.format})
