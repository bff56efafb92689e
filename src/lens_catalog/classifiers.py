"""Focal-length and lens-format bucket classification."""

from .models import FocalCategory, LensFormatCategory

_SPECIFIC_FOCAL_CATEGORIES = (
    FocalCategory.ULTRA_WIDE,
    FocalCategory.WIDE,
    FocalCategory.STANDARD,
    FocalCategory.TELE,
    FocalCategory.SUPER_TELE,
)

# First match wins; "ff" is checked after "vv"/"lf" so combined tags pick the larger format.
_LENS_FORMAT_PATTERNS: tuple[tuple[LensFormatCategory, tuple[str, ...]], ...] = (
    (LensFormatCategory.S16, ("s16",)),
    (LensFormatCategory.S35, ("s35",)),
    (LensFormatCategory.VV, ("vv",)),
    (LensFormatCategory.LF, ("lf", "65")),
    (LensFormatCategory.FF, ("ff",)),
    (LensFormatCategory.MFT, ("mft",)),
)


def classify_focal(focal: float | None) -> FocalCategory:
    """Map a numeric focal length to its bucket.

    Returns ALL when there is no specific bucket: for None, and for
    fractional values that fall between two buckets (e.g. 12.5).
    """
    for category in _SPECIFIC_FOCAL_CATEGORIES:
        if category.contains(focal):
            return category
    return FocalCategory.ALL


def classify_lens_format(tag: str | None) -> LensFormatCategory:
    """Map a raw lens-format tag ("S35+", "FF / VV", "mft") to its bucket."""
    if not tag:
        return LensFormatCategory.OTHER
    lowered = tag.lower()
    for category, needles in _LENS_FORMAT_PATTERNS:
        if any(needle in lowered for needle in needles):
            return category
    return LensFormatCategory.OTHER


def lens_format_contains(category: LensFormatCategory, tag: str | None) -> bool:
    return classify_lens_format(tag) == category
