"""Core data models for Lens Catalog."""

from datetime import datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from .parsing import parse_main_focal, parse_millimeters


def coerce_scalar(value: Any) -> Any:
    """Coerce a JSON scalar (str/int/float/bool) to its string form.

    Anything that is not a scalar is returned unchanged so that pydantic
    can report it.
    """
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (int, float)):
        return str(value)
    return value


class CatalogRecord(BaseModel):
    """Base for immutable catalog records decoded from external payloads."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="ignore")

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_to_text(cls, value: Any, info) -> Any:
        field = cls.model_fields[info.field_name]
        if value is None:
            return None if not field.is_required() and field.default is None else ""
        return coerce_scalar(value)


class FocalCategory(str, Enum):
    """Focal-length buckets."""

    ALL = "all"
    ULTRA_WIDE = "ultra_wide"
    WIDE = "wide"
    STANDARD = "standard"
    TELE = "tele"
    SUPER_TELE = "super_tele"

    @property
    def display_name(self) -> str:
        return _FOCAL_DISPLAY_NAMES[self]

    def contains(self, focal: float | None) -> bool:
        """Check whether a numeric focal length falls in this bucket.

        ``None`` never matches, not even ``ALL``.
        """
        if focal is None:
            return False
        if self is FocalCategory.ALL:
            return True
        if self is FocalCategory.ULTRA_WIDE:
            return focal <= 12
        if self is FocalCategory.WIDE:
            return 13 <= focal <= 35
        if self is FocalCategory.STANDARD:
            return 36 <= focal <= 70
        if self is FocalCategory.TELE:
            return 71 <= focal <= 180
        return focal > 180


_FOCAL_DISPLAY_NAMES = {
    FocalCategory.ALL: "All",
    FocalCategory.ULTRA_WIDE: "Ultra Wide (≤12mm)",
    FocalCategory.WIDE: "Wide (13–35mm)",
    FocalCategory.STANDARD: "Standard (36–70mm)",
    FocalCategory.TELE: "Tele (71–180mm)",
    FocalCategory.SUPER_TELE: "Super Tele (181mm+)",
}


class LensFormatCategory(str, Enum):
    """Coarse coverage buckets derived from a lens-format tag."""

    S16 = "S16"
    S35 = "S35"
    FF = "FF"
    VV = "VV"
    LF = "LF"
    MFT = "MFT"
    OTHER = "Other"

    @property
    def display_name(self) -> str:
        return _LENS_FORMAT_DISPLAY_NAMES[self]


_LENS_FORMAT_DISPLAY_NAMES = {
    LensFormatCategory.S16: "Super 16",
    LensFormatCategory.S35: "Super 35",
    LensFormatCategory.FF: "Full Frame",
    LensFormatCategory.VV: "Vista Vision",
    LensFormatCategory.LF: "Large Format",
    LensFormatCategory.MFT: "Micro Four Thirds",
    LensFormatCategory.OTHER: "Other / Unknown",
}


class CompatibilityStatus(str, Enum):
    """Coverage verdict for a lens on a recording area."""

    FULL_COVERAGE = "full_coverage"
    POSSIBLE_VIGNETTING = "possible_vignetting"
    UNKNOWN = "unknown"


class Lens(CatalogRecord):
    """A cinema lens."""

    id: str = ""
    display_name: str = Field("", validation_alias=AliasChoices("display_name", "displayName"))
    manufacturer: str = ""
    series_name: str = Field(
        "", validation_alias=AliasChoices("series_name", "lens_name", "lensName", "seriesName", "model")
    )
    format: str = ""
    focal_length: str = Field("", validation_alias=AliasChoices("focal_length", "focalLength"))
    aperture: str = ""
    close_focus_in: str = Field(
        "", validation_alias=AliasChoices("close_focus_in", "closeFocusIn", "closeFocusInches")
    )
    close_focus_cm: str = Field(
        "", validation_alias=AliasChoices("close_focus_cm", "closeFocusCm", "closeFocusCentimeters")
    )
    image_circle: str = Field("", validation_alias=AliasChoices("image_circle", "imageCircle"))
    length: str = ""
    front_diameter: str = Field(
        "", validation_alias=AliasChoices("front_diameter", "frontDiameter")
    )
    squeeze_factor: str | None = Field(
        None, validation_alias=AliasChoices("squeeze_factor", "squeezeFactor")
    )
    lens_format: str | None = Field(
        None, validation_alias=AliasChoices("lens_format", "lensFormat", "lensFormatCategory")
    )

    @property
    def main_focal(self) -> float | None:
        """First numeric token of the focal length."""
        return parse_main_focal(self.focal_length)

    @property
    def image_circle_mm(self) -> float | None:
        """Image circle in millimeters, if it parses."""
        return parse_millimeters(self.image_circle)


class Camera(CatalogRecord):
    """A camera body and its sensor."""

    id: str
    manufacturer: str = ""
    model: str = ""
    sensor_type: str = Field("", validation_alias=AliasChoices("sensor_type", "sensor", "sensorType"))
    sensor_width: str = Field(
        "", validation_alias=AliasChoices("sensor_width", "sensorwidth", "sensorWidth")
    )
    sensor_height: str = Field(
        "", validation_alias=AliasChoices("sensor_height", "sensorheight", "sensorHeight")
    )
    image_circle: str = Field(
        "", validation_alias=AliasChoices("image_circle", "imagecircle", "imageCircle")
    )

    @property
    def display_name(self) -> str:
        return f"{self.manufacturer} {self.model}".strip()


class RecordingFormat(CatalogRecord):
    """One recording mode of a camera."""

    id: str
    camera_id: str = Field("", validation_alias=AliasChoices("camera_id", "cameraid", "cameraId"))
    name: str = Field(
        "", validation_alias=AliasChoices("name", "recordingformat", "recordingFormat")
    )
    recording_width: str = Field(
        "", validation_alias=AliasChoices("recording_width", "recordingwidth", "recordingWidth")
    )
    recording_height: str = Field(
        "", validation_alias=AliasChoices("recording_height", "recordingheight", "recordingHeight")
    )
    recording_image_circle: str = Field(
        "",
        validation_alias=AliasChoices(
            "recording_image_circle", "recordingimagecircle", "recordingImageCircle"
        ),
    )


class Rental(CatalogRecord):
    """A rental house."""

    id: str
    name: str = ""
    address: str = ""
    phone: str = ""
    website: str = ""


class InventoryItem(CatalogRecord):
    """Join record: a rental house stocks a lens."""

    rental_id: str = Field(validation_alias=AliasChoices("rental_id", "rentalId"))
    lens_id: str = Field(validation_alias=AliasChoices("lens_id", "lensId"))
    id: str = ""
    display_name: str | None = None
    notes: str | None = None


class Catalog(BaseModel):
    """A fully decoded catalog snapshot."""

    model_config = ConfigDict(frozen=True)

    lenses: list[Lens] = Field(default_factory=list)
    cameras: list[Camera] = Field(default_factory=list)
    recording_formats: list[RecordingFormat] = Field(default_factory=list)
    rentals: list[Rental] = Field(default_factory=list)
    inventory: list[InventoryItem] = Field(default_factory=list)
    last_updated: str | None = None

    @property
    def is_empty(self) -> bool:
        return not self.lenses


class LensSeries(BaseModel):
    """Lenses of one series under a manufacturer."""

    name: str
    lenses: list[Lens]


class LensGroup(BaseModel):
    """All series of one manufacturer."""

    manufacturer: str
    series: list[LensSeries]

    @property
    def lens_count(self) -> int:
        return sum(len(s.lenses) for s in self.series)


class FilterCriteria(BaseModel):
    """Active filter state for the lens list."""

    search_text: str = ""
    format: str = ""
    focal_category: FocalCategory = FocalCategory.ALL
    lens_format_category: LensFormatCategory | None = None
    only_rentable: bool = False
    rental_id: str | None = None
    manufacturer: str | None = None


class CompatibilityVerdict(BaseModel):
    """Result of comparing a lens image circle with a recording diagonal."""

    status: CompatibilityStatus
    reason: str
    image_circle_mm: float | None = None
    diagonal_mm: float | None = None

    @property
    def is_compatible(self) -> bool:
        return self.status == CompatibilityStatus.FULL_COVERAGE


class FormatCompatibility(BaseModel):
    """Verdict for one recording format of a camera."""

    format_id: str
    format_name: str
    verdict: CompatibilityVerdict


class CameraCompatibilityReport(BaseModel):
    """Coverage of one lens across a camera's sensor and recording formats."""

    lens_id: str
    camera_id: str
    sensor: CompatibilityVerdict
    formats: list[FormatCompatibility] = Field(default_factory=list)


class Project(BaseModel):
    """A user-curated collection of lenses and cameras."""

    id: UUID = Field(default_factory=uuid4)
    name: str
    notes: str = ""
    date: datetime = Field(default_factory=datetime.now)
    lens_ids: list[str] = Field(default_factory=list)
    camera_ids: list[str] = Field(default_factory=list)

    @classmethod
    def empty(cls) -> "Project":
        """Create a blank project."""
        return cls(name="New Project")


class UserState(BaseModel):
    """Everything persisted between sessions."""

    version: int = 1
    id_sets: dict[str, list[str]] = Field(default_factory=dict)
    projects: list[Project] = Field(default_factory=list)
