"""Favorites and comparison operations with persistence."""

from .catalog import CatalogIndex
from .data_store import COMPARISON_KEY, FAVORITES_KEY, DataStore, DataStoreProtocol
from .models import Lens
from .selection import (
    MAX_COMPARISON_ITEMS,
    can_add_to_comparison,
    clear_comparison,
    toggle_comparison,
    toggle_favorite,
)


def _sorted_by_name(lenses: list[Lens]) -> list[Lens]:
    return sorted(lenses, key=lambda lens: (lens.display_name, lens.id))


class SelectionManager:
    """Manages the favorite and comparison sets.

    Every change goes through the pure toggles in ``selection`` and is saved
    immediately. Calls must be serialized by the caller; there is no locking.
    """

    def __init__(self, catalog: CatalogIndex, data_store: DataStoreProtocol | None = None):
        """Initialize selection manager.

        Args:
            catalog: Index of the loaded catalog, used to resolve ids
            data_store: Store for the id sets. Creates a DataStore if not provided.
        """
        self.catalog = catalog
        self.data_store = data_store or DataStore()

    def _require_known_or_member(self, lens_id: str, current: frozenset[str]) -> None:
        # Stale ids may still be removed after a catalog refresh.
        if lens_id not in current:
            self.catalog.get_lens(lens_id)

    def _lens_name(self, lens_id: str) -> str:
        lens = self.catalog.find_lens(lens_id)
        return lens.display_name if lens else lens_id

    # --- Favorites ---

    def favorites(self) -> frozenset[str]:
        return self.data_store.load_id_set(FAVORITES_KEY)

    def is_favorite(self, lens_id: str) -> bool:
        return lens_id in self.favorites()

    def toggle_favorite(self, lens_id: str) -> dict:
        """Add a lens to favorites, or remove it if already there.

        Args:
            lens_id: Lens ID

        Returns:
            Dict with success status and new favorite state

        Raises:
            LensNotFoundError: If adding a lens that is not in the catalog
        """
        current = self.favorites()
        self._require_known_or_member(lens_id, current)

        updated = toggle_favorite(current, lens_id)
        self.data_store.save_id_set(FAVORITES_KEY, updated)

        added = lens_id in updated
        name = self._lens_name(lens_id)
        return {
            "success": True,
            "message": f"Added {name} to favorites" if added else f"Removed {name} from favorites",
            "data": {"lens_id": lens_id, "favorite": added, "favorites_count": len(updated)},
        }

    def get_favorites(self) -> dict:
        """Get favorite lenses sorted by name, skipping ids no longer in the catalog."""
        ids = self.favorites()
        lenses = _sorted_by_name(self.catalog.resolve_lenses(ids))
        return {
            "success": True,
            "data": {
                "favorites": [lens.model_dump(mode="json") for lens in lenses],
                "total_items": len(lenses),
                "missing_ids": sorted(ids - {lens.id for lens in lenses}),
            },
        }

    # --- Comparison ---

    def comparison(self) -> frozenset[str]:
        return self.data_store.load_id_set(COMPARISON_KEY)

    def is_in_comparison(self, lens_id: str) -> bool:
        return lens_id in self.comparison()

    def can_add_to_comparison(self) -> bool:
        return can_add_to_comparison(self.comparison())

    def toggle_comparison(self, lens_id: str) -> dict:
        """Add a lens to the comparison, or remove it if already there.

        Args:
            lens_id: Lens ID

        Returns:
            Dict with success status and new comparison state

        Raises:
            LensNotFoundError: If adding a lens that is not in the catalog
            ComparisonCapacityError: If the comparison is already full
        """
        current = self.comparison()
        self._require_known_or_member(lens_id, current)

        updated = toggle_comparison(current, lens_id)
        self.data_store.save_id_set(COMPARISON_KEY, updated)

        added = lens_id in updated
        name = self._lens_name(lens_id)
        return {
            "success": True,
            "message": f"Added {name} to comparison" if added else f"Removed {name} from comparison",
            "data": {
                "lens_id": lens_id,
                "in_comparison": added,
                "comparison_count": len(updated),
                "capacity": MAX_COMPARISON_ITEMS,
            },
        }

    def clear_comparison(self) -> dict:
        """Remove every lens from the comparison."""
        removed = len(self.comparison())
        self.data_store.save_id_set(COMPARISON_KEY, clear_comparison())
        return {
            "success": True,
            "message": f"Cleared {removed} lenses from comparison",
            "data": {"removed_count": removed},
        }

    def get_comparison(self) -> dict:
        """Get the lenses being compared, skipping ids no longer in the catalog."""
        lenses = _sorted_by_name(self.catalog.resolve_lenses(self.comparison()))
        return {
            "success": True,
            "data": {
                "comparison": [lens.model_dump(mode="json") for lens in lenses],
                "total_items": len(lenses),
                "capacity": MAX_COMPARISON_ITEMS,
            },
        }
