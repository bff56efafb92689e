"""Favorite and comparison id sets.

Both sets are immutable ``frozenset`` values; every operation returns a new
set and leaves its argument untouched.
"""

MAX_COMPARISON_ITEMS = 4


class ComparisonCapacityError(Exception):
    """Raised when adding a lens to a full comparison set."""

    def __init__(self, lens_id: str, capacity: int = MAX_COMPARISON_ITEMS):
        self.lens_id = lens_id
        self.capacity = capacity
        super().__init__(
            f"Cannot compare lens '{lens_id}': comparison is limited to {capacity} lenses"
        )


def toggle_favorite(favorites: frozenset[str], lens_id: str) -> frozenset[str]:
    """Add the id if absent, remove it if present."""
    if lens_id in favorites:
        return favorites - {lens_id}
    return favorites | {lens_id}


def can_add_to_comparison(comparison: frozenset[str]) -> bool:
    return len(comparison) < MAX_COMPARISON_ITEMS


def toggle_comparison(comparison: frozenset[str], lens_id: str) -> frozenset[str]:
    """Toggle a lens in the comparison set.

    Removing a member always succeeds.

    Raises:
        ComparisonCapacityError: If adding to a set that already holds
            MAX_COMPARISON_ITEMS lenses
    """
    if lens_id in comparison:
        return comparison - {lens_id}
    if not can_add_to_comparison(comparison):
        raise ComparisonCapacityError(lens_id)
    return comparison | {lens_id}


def clear_comparison() -> frozenset[str]:
    return frozenset()
