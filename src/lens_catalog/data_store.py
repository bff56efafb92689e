"""Data persistence for Lens Catalog user state.

User state is a set of named id lists (favorites, comparison) plus the
saved projects. It is stored as JSON (default) or SQLite; use
create_data_store() to get the backend selected in configuration.
"""

import json
import logging
from datetime import date, datetime
from enum import Enum
from pathlib import Path
from typing import Any, Protocol
from uuid import UUID

from pydantic import ValidationError

from .models import Project, UserState

logger = logging.getLogger(__name__)

FAVORITES_KEY = "favorite_lenses"
COMPARISON_KEY = "comparison_lenses"

STATE_VERSION = 1


class BackendType(str, Enum):
    """Data storage backend types."""

    JSON = "json"
    SQLITE = "sqlite"


class DataStoreProtocol(Protocol):
    """Protocol defining the data store interface."""

    def load_id_set(self, name: str) -> frozenset[str]: ...
    def save_id_set(self, name: str, ids: frozenset[str] | set[str]) -> None: ...
    def load_projects(self) -> list[Project]: ...
    def save_projects(self, projects: list[Project]) -> None: ...
    def get_project(self, project_id: UUID) -> Project | None: ...


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for our data types."""

    def default(self, obj: Any) -> Any:
        if isinstance(obj, UUID):
            return str(obj)
        if isinstance(obj, (datetime, date)):
            return obj.isoformat()
        if isinstance(obj, (set, frozenset)):
            return sorted(obj)
        return super().default(obj)


class DataStore:
    """Manages JSON file persistence for user state."""

    def __init__(self, data_dir: Path | None = None):
        """Initialize data store.

        Args:
            data_dir: Directory for data files. Defaults to ./data
        """
        self.data_dir = data_dir or Path.cwd() / "data"
        self._ensure_directories()

    def _ensure_directories(self) -> None:
        """Create the data directory if it doesn't exist."""
        self.data_dir.mkdir(parents=True, exist_ok=True)

    def _state_path(self) -> Path:
        """Path to the user state file."""
        return self.data_dir / "user_state.json"

    def load_state(self) -> UserState:
        """Load the complete user state.

        Returns:
            UserState, empty if the file doesn't exist
        """
        path = self._state_path()
        if not path.exists():
            return UserState()

        try:
            with open(path) as f:
                data = json.load(f)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Ignoring unreadable state file %s: %s", path, e)
            return UserState()

        if not isinstance(data, dict):
            logger.error(
                "Ignoring unreadable state file %s: expected an object, got %s",
                path,
                type(data).__name__,
            )
            return UserState()

        version = data.get("version", STATE_VERSION)
        if isinstance(version, int) and version > STATE_VERSION:
            logger.warning(
                "State file %s has version %s; reading known fields only", path, version
            )

        try:
            return UserState.model_validate(data)
        except ValidationError as e:
            logger.error("Ignoring unreadable state file %s: %s", path, e)
            return UserState()

    def save_state(self, state: UserState) -> None:
        """Save the complete user state.

        A state read from a newer version is written back as the current
        version; fields this version doesn't know are dropped.

        Args:
            state: UserState to save
        """
        if state.version > STATE_VERSION:
            logger.warning(
                "Downgrading state file %s from version %s to %s",
                self._state_path(),
                state.version,
                STATE_VERSION,
            )
        state.version = STATE_VERSION
        with open(self._state_path(), "w") as f:
            json.dump(state.model_dump(), f, cls=JSONEncoder, indent=2)

    # --- Named Id Sets ---

    def load_id_set(self, name: str) -> frozenset[str]:
        """Load a named set of ids.

        Args:
            name: Set name, e.g. FAVORITES_KEY

        Returns:
            The stored ids, empty if never saved
        """
        return frozenset(self.load_state().id_sets.get(name, []))

    def save_id_set(self, name: str, ids: frozenset[str] | set[str]) -> None:
        """Replace a named set of ids.

        Args:
            name: Set name
            ids: Ids to store
        """
        state = self.load_state()
        state.id_sets[name] = sorted(ids)
        self.save_state(state)

    # --- Project Operations ---

    def load_projects(self) -> list[Project]:
        """Load all projects."""
        return self.load_state().projects

    def save_projects(self, projects: list[Project]) -> None:
        """Replace all projects.

        Args:
            projects: Projects to save
        """
        state = self.load_state()
        state.projects = projects
        self.save_state(state)

    def get_project(self, project_id: UUID) -> Project | None:
        """Get a specific project by ID.

        Args:
            project_id: UUID of the project

        Returns:
            Project if found, None otherwise
        """
        for project in self.load_projects():
            if project.id == project_id:
                return project
        return None


def create_data_store(
    backend: BackendType = BackendType.JSON,
    data_dir: Path | None = None,
    db_path: Path | None = None,
) -> DataStoreProtocol:
    """Create a data store with the specified backend.

    Args:
        backend: Which backend to use (json or sqlite)
        data_dir: Directory for data files (used by JSON backend, also used
                  as base path for SQLite if db_path not specified)
        db_path: Path to SQLite database file (only used by SQLite backend)

    Returns:
        A DataStore or SQLiteStore instance
    """
    if backend == BackendType.SQLITE:
        from .sqlite_store import SQLiteStore

        if db_path is None and data_dir is not None:
            db_path = data_dir / "lens_catalog.db"

        return SQLiteStore(db_path=db_path)
    else:
        return DataStore(data_dir=data_dir)
