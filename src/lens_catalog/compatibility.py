"""Geometric coverage checks between lenses and camera recording areas."""

from .models import (
    Camera,
    CameraCompatibilityReport,
    CompatibilityStatus,
    CompatibilityVerdict,
    FormatCompatibility,
    Lens,
    RecordingFormat,
)
from .parsing import parse_millimeters, recording_diagonal


def compare_coverage(
    image_circle_mm: float | None, diagonal_mm: float | None
) -> CompatibilityVerdict:
    """Compare an image circle against a recording diagonal, both in mm.

    Exact comparison with no tolerance: a circle equal to the diagonal
    covers it.
    """
    if image_circle_mm is None or diagonal_mm is None:
        missing = "lens image circle" if image_circle_mm is None else "recording size"
        return CompatibilityVerdict(
            status=CompatibilityStatus.UNKNOWN,
            reason=f"Unknown {missing}",
            image_circle_mm=image_circle_mm,
            diagonal_mm=diagonal_mm,
        )

    if image_circle_mm >= diagonal_mm:
        return CompatibilityVerdict(
            status=CompatibilityStatus.FULL_COVERAGE,
            reason=(
                f"Image circle {image_circle_mm:.1f}mm covers "
                f"the {diagonal_mm:.1f}mm diagonal"
            ),
            image_circle_mm=image_circle_mm,
            diagonal_mm=diagonal_mm,
        )

    return CompatibilityVerdict(
        status=CompatibilityStatus.POSSIBLE_VIGNETTING,
        reason=(
            f"Image circle {image_circle_mm:.1f}mm is smaller than "
            f"the {diagonal_mm:.1f}mm diagonal"
        ),
        image_circle_mm=image_circle_mm,
        diagonal_mm=diagonal_mm,
    )


def check_compatibility(
    lens_image_circle: str | None,
    format_width: str | None,
    format_height: str | None,
) -> CompatibilityVerdict:
    """Check whether a lens image circle covers a recording area.

    Args:
        lens_image_circle: Lens image circle text, e.g. "46.5mm"
        format_width: Recording width text, e.g. "36.0mm"
        format_height: Recording height text, e.g. "24.0mm"

    Returns:
        CompatibilityVerdict. UNKNOWN when any value does not parse.
    """
    return compare_coverage(
        parse_millimeters(lens_image_circle),
        recording_diagonal(format_width, format_height),
    )


def check_format(lens: Lens, recording_format: RecordingFormat) -> CompatibilityVerdict:
    """Verdict for a lens on one recording format."""
    return check_compatibility(
        lens.image_circle,
        recording_format.recording_width,
        recording_format.recording_height,
    )


def check_sensor(lens: Lens, camera: Camera) -> CompatibilityVerdict:
    """Verdict for a lens on a camera's full sensor area."""
    return check_compatibility(lens.image_circle, camera.sensor_width, camera.sensor_height)


def camera_report(
    lens: Lens, camera: Camera, formats: list[RecordingFormat]
) -> CameraCompatibilityReport:
    """Coverage of a lens on a camera's sensor and on each of its recording formats.

    Formats belonging to other cameras are ignored.
    """
    return CameraCompatibilityReport(
        lens_id=lens.id,
        camera_id=camera.id,
        sensor=check_sensor(lens, camera),
        formats=[
            FormatCompatibility(
                format_id=fmt.id,
                format_name=fmt.name,
                verdict=check_format(lens, fmt),
            )
            for fmt in formats
            if fmt.camera_id == camera.id
        ],
    )
