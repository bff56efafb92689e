"""Manufacturer -> series grouping of lenses."""

from collections import defaultdict

from .models import Lens, LensGroup, LensSeries
from .name_normalizer import normalize_name


def _display_name(spellings: list[str]) -> str:
    """Alphabetically-first original spelling, so the label never depends on input order."""
    return min(spellings)


def _lens_sort_key(lens: Lens) -> tuple[str, str]:
    return (lens.display_name, lens.id)


def group_lenses(lenses: list[Lens]) -> list[LensGroup]:
    """Partition lenses into manufacturer groups and series.

    Manufacturers and series are matched on their normalized names. Each is
    labelled with the alphabetically-first original spelling among its
    members. Groups, series and lenses are all sorted by display name.

    Args:
        lenses: Flat list of lenses, in any order

    Returns:
        Sorted list of LensGroup; empty for empty input
    """
    by_manufacturer: dict[str, list[Lens]] = defaultdict(list)
    for lens in lenses:
        by_manufacturer[normalize_name(lens.manufacturer)].append(lens)

    groups: list[tuple[str, str, LensGroup]] = []
    for manufacturer_key, members in by_manufacturer.items():
        by_series: dict[str, list[Lens]] = defaultdict(list)
        for lens in members:
            by_series[normalize_name(lens.series_name)].append(lens)

        series = [
            (
                _display_name([lens.series_name for lens in series_lenses]),
                series_key,
                sorted(series_lenses, key=_lens_sort_key),
            )
            for series_key, series_lenses in by_series.items()
        ]
        series.sort(key=lambda entry: (entry[0], entry[1]))

        manufacturer = _display_name([lens.manufacturer for lens in members])
        groups.append(
            (
                manufacturer,
                manufacturer_key,
                LensGroup(
                    manufacturer=manufacturer,
                    series=[LensSeries(name=name, lenses=items) for name, _, items in series],
                ),
            )
        )

    groups.sort(key=lambda entry: (entry[0], entry[1]))
    return [group for _, _, group in groups]
