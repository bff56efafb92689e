"""Tests for CLI commands."""

import json

import pytest
from typer.testing import CliRunner

from lens_catalog.main import app

runner = CliRunner()


@pytest.fixture
def invoke(temp_data_dir, catalog_dir):
    """Run a command in JSON mode against the sample catalog."""

    def _invoke(*args):
        return runner.invoke(
            app,
            ["--json", "--data-dir", str(temp_data_dir), "--catalog-dir", str(catalog_dir), *args],
        )

    return _invoke


def _payload(result):
    return json.loads(result.stdout)


class TestListCommand:
    """Tests for list command."""

    def test_list_grouped(self, invoke):
        result = invoke("list")
        assert result.exit_code == 0
        data = _payload(result)
        assert data["success"] is True
        assert data["data"]["total_items"] == 6
        assert [g["manufacturer"] for g in data["data"]["groups"]] == [
            "ARRI",
            "Angénieux",
            "Cooke",
            "ZEISS",
        ]

    def test_list_with_filters(self, invoke):
        result = invoke("list", "--focal", "wide", "--format", "S35")
        data = _payload(result)
        assert data["data"]["total_items"] == 2

    def test_list_lens_format_category(self, invoke):
        result = invoke("list", "--lens-format", "lf", "--flat")
        data = _payload(result)
        assert [lens["id"] for lens in data["data"]["lenses"]] == ["arri-sig-280"]

    def test_list_rentable_and_rental(self, invoke):
        assert _payload(invoke("list", "--rentable"))["data"]["total_items"] == 3
        assert _payload(invoke("list", "--rental", "r1"))["data"]["total_items"] == 2

    def test_list_search_and_manufacturer(self, invoke):
        assert _payload(invoke("list", "--search", "prime"))["data"]["total_items"] == 3
        assert _payload(invoke("list", "-m", "Zeiss"))["data"]["total_items"] == 2

    def test_list_invalid_focal(self, invoke):
        result = invoke("list", "--focal", "huge")
        assert result.exit_code != 0

    def test_missing_catalog_lists_nothing(self, temp_data_dir, tmp_path):
        result = runner.invoke(
            app,
            ["--json", "--data-dir", str(temp_data_dir), "--catalog-dir", str(tmp_path / "none"), "list"],
        )
        assert result.exit_code == 0
        assert '"total_items": 0' in result.stdout


class TestShowCommands:
    """Tests for detail commands."""

    def test_show(self, invoke):
        result = invoke("show", "zeiss-sp-50")
        assert result.exit_code == 0
        assert _payload(result)["data"]["focal_category"] == "standard"

    def test_show_unknown(self, invoke):
        result = invoke("show", "nope")
        assert result.exit_code == 1
        data = _payload(result)
        assert data["success"] is False
        assert data["error_code"] == "LENS_NOT_FOUND"

    def test_cameras_and_formats(self, invoke):
        assert len(_payload(invoke("cameras"))["data"]["cameras"]) == 2
        formats = _payload(invoke("formats", "venice"))["data"]["formats"]
        assert [f["id"] for f in formats] == ["venice-6k", "venice-4k"]

    def test_formats_unknown_camera(self, invoke):
        result = invoke("formats", "nope")
        assert result.exit_code == 1
        assert _payload(result)["error_code"] == "CAMERA_NOT_FOUND"

    def test_rentals(self, invoke):
        assert _payload(invoke("rentals"))["data"]["total_items"] == 2
        data = _payload(invoke("rental", "r2"))["data"]
        assert data["rental"]["id"] == "r2"
        assert data["total_items"] == 2

    def test_rental_unknown(self, invoke):
        result = invoke("rental", "nope")
        assert _payload(result)["error_code"] == "RENTAL_NOT_FOUND"


class TestCompatCommand:
    """Tests for compat command."""

    def test_camera_report(self, invoke):
        result = invoke("compat", "zeiss-sp-50", "venice")
        assert result.exit_code == 0
        report = _payload(result)["data"]["compatibility"]
        assert report["sensor"]["status"] == "full_coverage"
        assert len(report["formats"]) == 2

    def test_single_format(self, invoke):
        result = invoke("compat", "cooke-s4-32", "alexa-mini", "--format", "mini-og")
        assert _payload(result)["data"]["verdict"]["status"] == "possible_vignetting"

    def test_unknown_format(self, invoke):
        result = invoke("compat", "cooke-s4-32", "alexa-mini", "--format", "venice-6k")
        assert result.exit_code == 1
        assert _payload(result)["error_code"] == "FORMAT_NOT_FOUND"


class TestSelectionCommands:
    """Tests for favorites and comparison commands."""

    def test_favorite_toggle(self, invoke):
        result = invoke("favorite", "cooke-s4-32")
        assert result.exit_code == 0
        assert _payload(result)["data"]["favorite"] is True

        favorites = _payload(invoke("favorites"))["data"]["favorites"]
        assert [lens["id"] for lens in favorites] == ["cooke-s4-32"]

        result = invoke("favorite", "cooke-s4-32")
        assert _payload(result)["data"]["favorite"] is False

    def test_compare_capacity(self, invoke):
        for lens_id in ["cooke-s4-32", "cooke-s4-75", "zeiss-sp-50", "zeiss-sp-18"]:
            assert invoke("compare", lens_id).exit_code == 0

        result = invoke("compare", "arri-sig-280")
        assert result.exit_code == 1
        assert _payload(result)["error_code"] == "COMPARISON_FULL"

        assert _payload(invoke("comparison"))["data"]["total_items"] == 4

    def test_compare_clear(self, invoke):
        invoke("compare", "cooke-s4-32")
        result = invoke("compare-clear")
        assert result.exit_code == 0
        assert _payload(result)["data"]["removed_count"] == 1
        assert _payload(invoke("comparison"))["data"]["total_items"] == 0


class TestProjectCommands:
    """Tests for project subcommands."""

    def _create(self, invoke, name="Feature"):
        result = invoke("project", "create", name, "--notes", "Night exteriors")
        assert result.exit_code == 0
        return _payload(result)["data"]["project"]["id"]

    def test_create_and_list(self, invoke):
        self._create(invoke)
        projects = _payload(invoke("project", "list"))["data"]["projects"]
        assert [p["name"] for p in projects] == ["Feature"]

    def test_lens_and_camera_entries(self, invoke):
        project_id = self._create(invoke)
        assert invoke("project", "add-lens", project_id, "zeiss-sp-50").exit_code == 0
        assert invoke("project", "add-camera", project_id, "venice").exit_code == 0

        data = _payload(invoke("project", "show", project_id))["data"]
        assert [lens["id"] for lens in data["lenses"]] == ["zeiss-sp-50"]
        assert [c["id"] for c in data["cameras"]] == ["venice"]

        assert invoke("project", "remove-lens", project_id, "zeiss-sp-50").exit_code == 0
        assert invoke("project", "remove-camera", project_id, "venice").exit_code == 0

    def test_duplicate_lens(self, invoke):
        project_id = self._create(invoke)
        invoke("project", "add-lens", project_id, "zeiss-sp-50")
        result = invoke("project", "add-lens", project_id, "zeiss-sp-50")
        assert result.exit_code == 1
        assert _payload(result)["error_code"] == "DUPLICATE_ENTRY"

    def test_update_and_delete(self, invoke):
        project_id = self._create(invoke)
        result = invoke("project", "update", project_id, "--name", "Feature II")
        assert _payload(result)["data"]["project"]["name"] == "Feature II"

        assert invoke("project", "delete", project_id).exit_code == 0
        result = invoke("project", "show", project_id)
        assert result.exit_code == 1
        assert _payload(result)["error_code"] == "PROJECT_NOT_FOUND"


class TestRichOutput:
    """Tests for non-JSON output."""

    def test_list_tree(self, temp_data_dir, catalog_dir):
        result = runner.invoke(
            app, ["--data-dir", str(temp_data_dir), "--catalog-dir", str(catalog_dir), "list"]
        )
        assert result.exit_code == 0
        assert "Total lenses: 6" in result.stdout

    def test_error_message(self, temp_data_dir, catalog_dir):
        result = runner.invoke(
            app,
            ["--data-dir", str(temp_data_dir), "--catalog-dir", str(catalog_dir), "show", "nope"],
        )
        assert result.exit_code == 1
        assert "Lens with ID 'nope' not found" in result.stdout


class TestInfoCommand:
    """Tests for info command."""

    def test_info(self, invoke):
        result = invoke("info")
        assert result.exit_code == 0
        summary = _payload(result)["data"]["summary"]
        assert summary["lenses"] == 6
        assert summary["rentable_lenses"] == 3
        assert summary["last_updated"] == "2026-01-25"

    def test_info_undecodable_catalog(self, invoke, catalog_dir):
        (catalog_dir / "LENSDATA.json").write_text("{not json")
        result = invoke("info")
        assert result.exit_code == 1
        assert _payload(result)["error_code"] == "CATALOG_DECODE_FAILED"
