"""Shared test fixtures for Lens Catalog."""

import json

import pytest

from lens_catalog.catalog import CatalogIndex
from lens_catalog.catalog_loader import load_catalog
from lens_catalog.data_store import DataStore
from lens_catalog.models import Lens
from lens_catalog.project_manager import ProjectManager
from lens_catalog.selection_manager import SelectionManager


@pytest.fixture
def temp_data_dir(tmp_path):
    """Create a temporary data directory."""
    data_dir = tmp_path / "test_data"
    data_dir.mkdir()
    return data_dir


@pytest.fixture
def lens_payload():
    """Lens file payload with mixed field spellings and scalar types."""
    return {
        "last_updated": "2026-01-25",
        "rentals": [
            {
                "id": "r1",
                "name": "Camera House",
                "address": "1 Main St",
                "phone": "555-0100",
                "website": "https://camerahouse.example",
            },
            {
                "id": "r2",
                "name": "Lens Depot",
                "address": "2 Side St",
                "phone": "555-0200",
                "website": "https://lensdepot.example",
            },
        ],
        "lenses": [
            {
                "id": "cooke-s4-32",
                "display_name": "Cooke S4/i 32mm",
                "manufacturer": "Cooke",
                "lens_name": "S4/i",
                "format": "S35",
                "focal_length": "32mm",
                "aperture": "T2.0",
                "close_focus_in": "14",
                "close_focus_cm": "35",
                "image_circle": "33mm",
                "length": "90mm",
                "front_diameter": "110mm",
                "lens_format": "S35",
            },
            {
                "id": "cooke-s4-75",
                "display_name": "Cooke S4/i 75mm",
                "manufacturer": "Cooke",
                "lens_name": "S4/i",
                "format": "S35",
                "focal_length": "75mm",
                "aperture": "T2.0",
                "image_circle": "33mm",
                "lens_format": "S35",
            },
            {
                "id": "zeiss-sp-50",
                "displayName": "Zeiss Supreme Prime 50mm",
                "manufacturer": "Zeiss",
                "lensName": "Supreme Prime",
                "format": "FF",
                "focalLength": 50,
                "aperture": "T1.5",
                "imageCircle": "46.5mm",
                "lensFormat": "FF",
            },
            {
                "id": "zeiss-sp-18",
                "display_name": "Zeiss Supreme Prime 18mm",
                "manufacturer": "ZEISS",
                "lens_name": "Supreme Prime Series",
                "format": "FF",
                "focal_length": "18mm",
                "aperture": "T1.5",
                "image_circle": "46,5 mm",
                "lens_format": "FF",
            },
            {
                "id": "angenieux-optimo",
                "display_name": "Angenieux Optimo 24-290",
                "manufacturer": "Angénieux",
                "lens_name": "Optimo",
                "format": "S35",
                "focal_length": "24-290mm",
                "aperture": "T2.8",
                "image_circle": "-",
                "lens_format": "S35",
            },
            {
                "id": "arri-sig-280",
                "display_name": "ARRI Signature Prime 280mm",
                "manufacturer": "ARRI",
                "lens_name": "Signature Prime",
                "format": "LF",
                "focal_length": "280mm",
                "aperture": "T2.8",
                "image_circle": "46.2mm",
                "lens_format": "LF",
                "squeeze_factor": None,
            },
        ],
        "inventory": {
            "r1": [{"lens_id": "cooke-s4-32"}, {"lens_id": "zeiss-sp-50"}],
            "r2": [{"lens_id": "zeiss-sp-50"}, {"lens_id": "arri-sig-280"}],
        },
    }


@pytest.fixture
def camera_payload():
    """Camera file payload."""
    return {
        "camera": [
            {
                "id": "venice",
                "manufacturer": "Sony",
                "model": "Venice",
                "sensor": "FF",
                "sensorwidth": "36.2mm",
                "sensorheight": "24.1mm",
                "imagecircle": "43.5mm",
            },
            {
                "id": "alexa-mini",
                "manufacturer": "ARRI",
                "model": "Alexa Mini",
                "sensor": "S35",
                "sensorwidth": "28.25mm",
                "sensorheight": "18.17mm",
                "imagecircle": "33.59mm",
            },
        ],
        "formats": [
            {
                "id": "venice-6k",
                "cameraid": "venice",
                "recordingformat": "6K 3:2",
                "recordingwidth": "36.2mm",
                "recordingheight": "24.1mm",
            },
            {
                "id": "venice-4k",
                "cameraid": "venice",
                "recordingformat": "4K 17:9",
                "recordingwidth": "24.3mm",
                "recordingheight": "12.8mm",
            },
            {
                "id": "mini-og",
                "cameraid": "alexa-mini",
                "recordingformat": "3.4K Open Gate",
                "recordingwidth": "28.25mm",
                "recordingheight": "18.17mm",
            },
        ],
    }


@pytest.fixture
def catalog_dir(tmp_path, lens_payload, camera_payload):
    """Directory holding LENSDATA.json and CAMERADATA.json."""
    directory = tmp_path / "catalog"
    directory.mkdir()
    (directory / "LENSDATA.json").write_text(json.dumps(lens_payload))
    (directory / "CAMERADATA.json").write_text(json.dumps(camera_payload))
    return directory


@pytest.fixture
def catalog(catalog_dir):
    """Catalog loaded from the sample files."""
    return load_catalog(catalog_dir)


@pytest.fixture
def catalog_index(catalog):
    """Index over the sample catalog."""
    return CatalogIndex(catalog)


@pytest.fixture
def data_store(temp_data_dir):
    """Create a DataStore with temporary directory."""
    return DataStore(data_dir=temp_data_dir)


@pytest.fixture
def selection_manager(catalog_index, data_store):
    """Create a SelectionManager with temporary storage."""
    return SelectionManager(catalog_index, data_store)


@pytest.fixture
def project_manager(data_store, catalog_index):
    """Create a ProjectManager with temporary storage."""
    return ProjectManager(data_store=data_store, catalog=catalog_index)


@pytest.fixture
def make_lens():
    """Factory for ad hoc lenses."""

    def _make(lens_id="lens", manufacturer="Cooke", series="S4/i", **fields):
        return Lens(
            id=lens_id,
            display_name=fields.pop("display_name", f"{manufacturer} {series} {lens_id}"),
            manufacturer=manufacturer,
            series_name=series,
            **fields,
        )

    return _make
