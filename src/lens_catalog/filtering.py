"""Lens list filtering."""

from collections.abc import Iterable

from .classifiers import lens_format_contains
from .models import FilterCriteria, FocalCategory, InventoryItem, Lens
from .name_normalizer import normalize_name


def rentable_lens_ids(
    inventory: Iterable[InventoryItem], rental_id: str | None = None
) -> set[str]:
    """Ids of lenses stocked anywhere, or only by ``rental_id`` when given."""
    return {
        item.lens_id
        for item in inventory
        if rental_id is None or item.rental_id == rental_id
    }


def matches_search(lens: Lens, search_text: str) -> bool:
    """Case-insensitive substring match on display name, series or manufacturer."""
    if not search_text:
        return True
    needle = search_text.casefold()
    return any(
        needle in field.casefold()
        for field in (lens.display_name, lens.series_name, lens.manufacturer)
    )


def filter_lenses(
    lenses: list[Lens],
    criteria: FilterCriteria | None = None,
    inventory: Iterable[InventoryItem] = (),
) -> list[Lens]:
    """Apply every active criterion (AND) to a flat lens list.

    Args:
        lenses: Lenses to filter
        criteria: Filter state. None or defaults keep every lens.
        inventory: Inventory used by the rentable and rental criteria

    Returns:
        Matching lenses in input order
    """
    criteria = criteria or FilterCriteria()
    items = list(lenses)

    if criteria.search_text:
        items = [lens for lens in items if matches_search(lens, criteria.search_text)]

    if criteria.format:
        items = [lens for lens in items if lens.format == criteria.format]

    if criteria.focal_category != FocalCategory.ALL:
        items = [lens for lens in items if criteria.focal_category.contains(lens.main_focal)]

    if criteria.lens_format_category is not None:
        items = [
            lens
            for lens in items
            if lens_format_contains(criteria.lens_format_category, lens.lens_format)
        ]

    if criteria.manufacturer:
        manufacturer_key = normalize_name(criteria.manufacturer)
        items = [lens for lens in items if normalize_name(lens.manufacturer) == manufacturer_key]

    if criteria.only_rentable or criteria.rental_id is not None:
        inventory = list(inventory)
        if criteria.only_rentable:
            stocked = rentable_lens_ids(inventory)
            items = [lens for lens in items if lens.id in stocked]
        if criteria.rental_id is not None:
            stocked = rentable_lens_ids(inventory, criteria.rental_id)
            items = [lens for lens in items if lens.id in stocked]

    return items
