"""Lens Catalog - Browse, filter and compare cinema lenses."""

from .catalog import CameraNotFoundError, CatalogIndex, LensNotFoundError, RentalNotFoundError
from .catalog_loader import CatalogDecodeError, load_catalog, load_catalog_or_empty
from .classifiers import classify_focal, classify_lens_format
from .compatibility import camera_report, check_compatibility
from .config import ConfigManager
from .data_store import BackendType, create_data_store, DataStore
from .filtering import filter_lenses
from .grouping import group_lenses
from .lens_browser import FormatNotFoundError, LensBrowser
from .models import (
    Camera,
    CameraCompatibilityReport,
    Catalog,
    CompatibilityStatus,
    CompatibilityVerdict,
    FilterCriteria,
    FocalCategory,
    InventoryItem,
    Lens,
    LensFormatCategory,
    LensGroup,
    LensSeries,
    Project,
    RecordingFormat,
    Rental,
    UserState,
)
from .name_normalizer import normalize_name
from .output_formatter import OutputFormatter
from .parsing import parse_main_focal, parse_millimeters
from .project_manager import DuplicateEntryError, EntryNotFoundError, ProjectManager, ProjectNotFoundError
from .selection import (
    can_add_to_comparison,
    clear_comparison,
    ComparisonCapacityError,
    MAX_COMPARISON_ITEMS,
    toggle_comparison,
    toggle_favorite,
)
from .selection_manager import SelectionManager
from .sqlite_store import SQLiteStore

__version__ = "0.1.0"

__all__ = [
    "BackendType",
    "Camera",
    "CameraCompatibilityReport",
    "camera_report",
    "can_add_to_comparison",
    "CameraNotFoundError",
    "Catalog",
    "CatalogDecodeError",
    "CatalogIndex",
    "check_compatibility",
    "classify_focal",
    "classify_lens_format",
    "clear_comparison",
    "ComparisonCapacityError",
    "CompatibilityStatus",
    "CompatibilityVerdict",
    "ConfigManager",
    "create_data_store",
    "DataStore",
    "DuplicateEntryError",
    "EntryNotFoundError",
    "filter_lenses",
    "FilterCriteria",
    "FocalCategory",
    "FormatNotFoundError",
    "group_lenses",
    "InventoryItem",
    "Lens",
    "LensBrowser",
    "LensFormatCategory",
    "LensGroup",
    "LensNotFoundError",
    "LensSeries",
    "load_catalog",
    "load_catalog_or_empty",
    "MAX_COMPARISON_ITEMS",
    "normalize_name",
    "OutputFormatter",
    "parse_main_focal",
    "parse_millimeters",
    "Project",
    "ProjectManager",
    "ProjectNotFoundError",
    "RecordingFormat",
    "Rental",
    "RentalNotFoundError",
    "SelectionManager",
    "SQLiteStore",
    "toggle_comparison",
    "toggle_favorite",
    "UserState",
]
