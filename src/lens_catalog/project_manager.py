"""Project management operations."""

from uuid import UUID

from .catalog import CatalogIndex
from .data_store import DataStore, DataStoreProtocol
from .models import Project


class ProjectNotFoundError(Exception):
    """Raised when a project is not found."""

    def __init__(self, project_id: UUID | str):
        self.project_id = project_id
        super().__init__(f"Project with ID '{project_id}' not found")


class DuplicateEntryError(Exception):
    """Raised when adding a lens or camera a project already holds."""

    def __init__(self, project: Project, kind: str, entry_id: str):
        self.project = project
        self.kind = kind
        self.entry_id = entry_id
        super().__init__(f"{kind.capitalize()} '{entry_id}' is already in project '{project.name}'")


class EntryNotFoundError(Exception):
    """Raised when removing a lens or camera a project does not hold."""

    def __init__(self, project: Project, kind: str, entry_id: str):
        self.project = project
        self.kind = kind
        self.entry_id = entry_id
        super().__init__(f"{kind.capitalize()} '{entry_id}' is not in project '{project.name}'")


class ProjectManager:
    """Manages user projects."""

    def __init__(
        self,
        data_store: DataStoreProtocol | None = None,
        catalog: CatalogIndex | None = None,
    ):
        """Initialize project manager.

        Args:
            data_store: DataStore instance. Creates new one if not provided.
            catalog: Catalog index used to validate and resolve ids.
                     Without it, ids are stored unchecked.
        """
        self.data_store = data_store or DataStore()
        self.catalog = catalog

    @staticmethod
    def _parse_id(project_id: UUID | str) -> UUID:
        if isinstance(project_id, UUID):
            return project_id
        try:
            return UUID(project_id)
        except ValueError:
            raise ProjectNotFoundError(project_id) from None

    def _locate(self, projects: list[Project], project_id: UUID | str) -> Project:
        project_uuid = self._parse_id(project_id)
        for project in projects:
            if project.id == project_uuid:
                return project
        raise ProjectNotFoundError(project_id)

    def create_project(self, name: str | None = None, notes: str = "") -> dict:
        """Create a new, empty project.

        Args:
            name: Project name. Defaults to "New Project".
            notes: Free-text notes

        Returns:
            Dict with success status and project data
        """
        project = Project.empty()
        if name:
            project.name = name
        project.notes = notes

        projects = self.data_store.load_projects()
        projects.append(project)
        self.data_store.save_projects(projects)

        return {
            "success": True,
            "message": f"Created project {project.name}",
            "data": {"project": project.model_dump(mode="json")},
        }

    def get_project(self, project_id: UUID | str) -> Project:
        """Get a specific project by ID.

        Raises:
            ProjectNotFoundError: If project not found
        """
        project = self.data_store.get_project(self._parse_id(project_id))
        if project is None:
            raise ProjectNotFoundError(project_id)
        return project

    def list_projects(self) -> dict:
        """List projects, newest first."""
        projects = sorted(self.data_store.load_projects(), key=lambda p: p.date, reverse=True)
        return {
            "success": True,
            "data": {
                "projects": [p.model_dump(mode="json") for p in projects],
                "total_items": len(projects),
            },
        }

    def show_project(self, project_id: UUID | str) -> dict:
        """Get a project with its lenses and cameras resolved.

        Ids no longer in the catalog are left out of the resolved lists.
        """
        project = self.get_project(project_id)
        data: dict = {"project": project.model_dump(mode="json")}
        if self.catalog is not None:
            data["lenses"] = [
                lens.model_dump(mode="json")
                for lens in self.catalog.resolve_lenses(project.lens_ids)
            ]
            data["cameras"] = [
                camera.model_dump(mode="json")
                for camera in map(self.catalog.find_camera, project.camera_ids)
                if camera is not None
            ]
        return {"success": True, "data": data}

    def update_project(
        self,
        project_id: UUID | str,
        name: str | None = None,
        notes: str | None = None,
    ) -> dict:
        """Rename a project or replace its notes.

        Raises:
            ProjectNotFoundError: If project not found
        """
        projects = self.data_store.load_projects()
        project = self._locate(projects, project_id)

        if name is not None:
            project.name = name
        if notes is not None:
            project.notes = notes

        self.data_store.save_projects(projects)
        return {
            "success": True,
            "message": f"Updated project {project.name}",
            "data": {"project": project.model_dump(mode="json")},
        }

    def delete_project(self, project_id: UUID | str) -> dict:
        """Delete a project.

        Raises:
            ProjectNotFoundError: If project not found
        """
        projects = self.data_store.load_projects()
        project = self._locate(projects, project_id)
        projects.remove(project)
        self.data_store.save_projects(projects)
        return {
            "success": True,
            "message": f"Deleted project {project.name}",
            "data": {"project": project.model_dump(mode="json")},
        }

    def _add_entry(self, project_id: UUID | str, kind: str, entry_id: str) -> dict:
        projects = self.data_store.load_projects()
        project = self._locate(projects, project_id)

        if self.catalog is not None:
            if kind == "lens":
                self.catalog.get_lens(entry_id)
            else:
                self.catalog.get_camera(entry_id)

        entries = project.lens_ids if kind == "lens" else project.camera_ids
        if entry_id in entries:
            raise DuplicateEntryError(project, kind, entry_id)
        entries.append(entry_id)

        self.data_store.save_projects(projects)
        return {
            "success": True,
            "message": f"Added {kind} {entry_id} to {project.name}",
            "data": {"project": project.model_dump(mode="json")},
        }

    def _remove_entry(self, project_id: UUID | str, kind: str, entry_id: str) -> dict:
        projects = self.data_store.load_projects()
        project = self._locate(projects, project_id)

        entries = project.lens_ids if kind == "lens" else project.camera_ids
        if entry_id not in entries:
            raise EntryNotFoundError(project, kind, entry_id)
        entries.remove(entry_id)

        self.data_store.save_projects(projects)
        return {
            "success": True,
            "message": f"Removed {kind} {entry_id} from {project.name}",
            "data": {"project": project.model_dump(mode="json")},
        }

    def add_lens(self, project_id: UUID | str, lens_id: str) -> dict:
        """Add a lens to a project.

        Raises:
            ProjectNotFoundError: If project not found
            LensNotFoundError: If the lens is not in the catalog
            DuplicateEntryError: If the project already holds the lens
        """
        return self._add_entry(project_id, "lens", lens_id)

    def remove_lens(self, project_id: UUID | str, lens_id: str) -> dict:
        """Remove a lens from a project.

        Raises:
            ProjectNotFoundError: If project not found
            EntryNotFoundError: If the project does not hold the lens
        """
        return self._remove_entry(project_id, "lens", lens_id)

    def add_camera(self, project_id: UUID | str, camera_id: str) -> dict:
        """Add a camera to a project.

        Raises:
            ProjectNotFoundError: If project not found
            CameraNotFoundError: If the camera is not in the catalog
            DuplicateEntryError: If the project already holds the camera
        """
        return self._add_entry(project_id, "camera", camera_id)

    def remove_camera(self, project_id: UUID | str, camera_id: str) -> dict:
        return self._remove_entry(project_id, "camera", camera_id)
