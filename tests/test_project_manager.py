"""Tests for project management."""

from datetime import datetime, timedelta

import pytest

from lens_catalog.catalog import CameraNotFoundError, LensNotFoundError
from lens_catalog.models import Project
from lens_catalog.project_manager import (
    DuplicateEntryError,
    EntryNotFoundError,
    ProjectNotFoundError,
)


@pytest.fixture
def project_id(project_manager):
    """Create a project and return its id."""
    result = project_manager.create_project("Feature", notes="Night exteriors")
    return result["data"]["project"]["id"]


class TestCreateProject:
    """Tests for creating projects."""

    def test_create(self, project_manager):
        result = project_manager.create_project("Feature", notes="Night exteriors")
        assert result["success"] is True
        assert result["message"] == "Created project Feature"
        assert result["data"]["project"]["notes"] == "Night exteriors"
        assert result["data"]["project"]["lens_ids"] == []

    def test_default_name(self, project_manager):
        result = project_manager.create_project()
        assert result["data"]["project"]["name"] == "New Project"


class TestReadProjects:
    """Tests for listing and showing projects."""

    def test_list_newest_first(self, project_manager, data_store):
        now = datetime.now()
        data_store.save_projects(
            [
                Project(name="Old", date=now - timedelta(days=2)),
                Project(name="New", date=now),
                Project(name="Middle", date=now - timedelta(days=1)),
            ]
        )
        result = project_manager.list_projects()
        assert [p["name"] for p in result["data"]["projects"]] == ["New", "Middle", "Old"]
        assert result["data"]["total_items"] == 3

    def test_show_resolves_entries(self, project_manager, project_id, data_store):
        project_manager.add_lens(project_id, "zeiss-sp-50")
        project_manager.add_camera(project_id, "venice")

        # A lens that has since left the catalog
        projects = data_store.load_projects()
        projects[0].lens_ids.append("gone")
        data_store.save_projects(projects)

        result = project_manager.show_project(project_id)
        assert result["data"]["project"]["lens_ids"] == ["zeiss-sp-50", "gone"]
        assert [lens["id"] for lens in result["data"]["lenses"]] == ["zeiss-sp-50"]
        assert [c["id"] for c in result["data"]["cameras"]] == ["venice"]

    def test_unknown_project(self, project_manager):
        with pytest.raises(ProjectNotFoundError):
            project_manager.get_project("00000000-0000-0000-0000-000000000000")

    def test_malformed_id(self, project_manager):
        with pytest.raises(ProjectNotFoundError):
            project_manager.show_project("not-a-uuid")


class TestUpdateDelete:
    """Tests for updating and deleting projects."""

    def test_update(self, project_manager, project_id):
        result = project_manager.update_project(project_id, name="Feature II")
        assert result["message"] == "Updated project Feature II"
        project = project_manager.get_project(project_id)
        assert project.name == "Feature II"
        assert project.notes == "Night exteriors"

    def test_delete(self, project_manager, project_id):
        result = project_manager.delete_project(project_id)
        assert result["message"] == "Deleted project Feature"
        with pytest.raises(ProjectNotFoundError):
            project_manager.get_project(project_id)

    def test_delete_unknown(self, project_manager):
        with pytest.raises(ProjectNotFoundError):
            project_manager.delete_project("00000000-0000-0000-0000-000000000000")


class TestEntries:
    """Tests for adding and removing lenses and cameras."""

    def test_add_and_remove_lens(self, project_manager, project_id):
        result = project_manager.add_lens(project_id, "cooke-s4-32")
        assert result["message"] == "Added lens cooke-s4-32 to Feature"

        result = project_manager.remove_lens(project_id, "cooke-s4-32")
        assert result["message"] == "Removed lens cooke-s4-32 from Feature"
        assert result["data"]["project"]["lens_ids"] == []

    def test_duplicate_lens(self, project_manager, project_id):
        project_manager.add_lens(project_id, "cooke-s4-32")
        with pytest.raises(DuplicateEntryError) as exc_info:
            project_manager.add_lens(project_id, "cooke-s4-32")
        assert exc_info.value.kind == "lens"

    def test_unknown_lens(self, project_manager, project_id):
        with pytest.raises(LensNotFoundError):
            project_manager.add_lens(project_id, "nope")

    def test_unknown_camera(self, project_manager, project_id):
        with pytest.raises(CameraNotFoundError):
            project_manager.add_camera(project_id, "nope")

    def test_remove_absent_camera(self, project_manager, project_id):
        with pytest.raises(EntryNotFoundError):
            project_manager.remove_camera(project_id, "venice")

    def test_add_keeps_order(self, project_manager, project_id):
        for lens_id in ["zeiss-sp-50", "cooke-s4-32", "arri-sig-280"]:
            project_manager.add_lens(project_id, lens_id)
        assert project_manager.get_project(project_id).lens_ids == [
            "zeiss-sp-50",
            "cooke-s4-32",
            "arri-sig-280",
        ]
