"""SQLite-based persistence for Lens Catalog user state.

This module provides SQLite database storage as an alternative to the JSON
file. It implements the same interface as DataStore for seamless switching.
"""

import json
import logging
import sqlite3
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from uuid import UUID

from .models import Project

logger = logging.getLogger(__name__)


class SQLiteStore:
    """Manages SQLite database persistence for user state."""

    SCHEMA_VERSION = 1

    def __init__(self, db_path: Path | None = None):
        """Initialize SQLite store.

        Args:
            db_path: Path to the SQLite database file. Defaults to ./data/lens_catalog.db
        """
        if db_path is None:
            db_path = Path.cwd() / "data" / "lens_catalog.db"
        self.db_path = db_path
        self._ensure_directories()
        self._init_database()

    def _ensure_directories(self) -> None:
        """Create necessary directories if they don't exist."""
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    @contextmanager
    def _get_connection(self):
        """Get a database connection with proper cleanup."""
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def _init_database(self) -> None:
        """Initialize database schema if not exists."""
        with self._get_connection() as conn:
            conn.executescript("""
                -- Schema version tracking
                CREATE TABLE IF NOT EXISTS schema_version (
                    version INTEGER PRIMARY KEY
                );

                -- Named id sets (favorites, comparison)
                CREATE TABLE IF NOT EXISTS id_sets (
                    set_name TEXT NOT NULL,
                    item_id TEXT NOT NULL,
                    PRIMARY KEY (set_name, item_id)
                );

                -- Projects
                CREATE TABLE IF NOT EXISTS projects (
                    id TEXT PRIMARY KEY,
                    position INTEGER NOT NULL,
                    name TEXT NOT NULL,
                    notes TEXT NOT NULL DEFAULT '',
                    date TEXT NOT NULL,
                    lens_ids TEXT NOT NULL DEFAULT '[]',
                    camera_ids TEXT NOT NULL DEFAULT '[]'
                );
            """)
            conn.execute(
                "INSERT OR IGNORE INTO schema_version (version) VALUES (?)",
                (self.SCHEMA_VERSION,),
            )
        logger.debug("Initialized SQLite schema v%d at %s", self.SCHEMA_VERSION, self.db_path)

    # --- Named Id Sets ---

    def load_id_set(self, name: str) -> frozenset[str]:
        """Load a named set of ids.

        Args:
            name: Set name, e.g. FAVORITES_KEY

        Returns:
            The stored ids, empty if never saved
        """
        with self._get_connection() as conn:
            rows = conn.execute(
                "SELECT item_id FROM id_sets WHERE set_name = ?", (name,)
            ).fetchall()
            return frozenset(row["item_id"] for row in rows)

    def save_id_set(self, name: str, ids: frozenset[str] | set[str]) -> None:
        """Replace a named set of ids.

        Args:
            name: Set name
            ids: Ids to store
        """
        with self._get_connection() as conn:
            conn.execute("DELETE FROM id_sets WHERE set_name = ?", (name,))
            conn.executemany(
                "INSERT INTO id_sets (set_name, item_id) VALUES (?, ?)",
                [(name, item_id) for item_id in sorted(ids)],
            )

    # --- Project Operations ---

    def _row_to_project(self, row: sqlite3.Row) -> Project:
        return Project(
            id=UUID(row["id"]),
            name=row["name"],
            notes=row["notes"],
            date=datetime.fromisoformat(row["date"]),
            lens_ids=json.loads(row["lens_ids"]),
            camera_ids=json.loads(row["camera_ids"]),
        )

    def load_projects(self) -> list[Project]:
        """Load all projects in saved order."""
        with self._get_connection() as conn:
            rows = conn.execute("SELECT * FROM projects ORDER BY position").fetchall()
            return [self._row_to_project(row) for row in rows]

    def save_projects(self, projects: list[Project]) -> None:
        """Replace all projects.

        Args:
            projects: Projects to save
        """
        with self._get_connection() as conn:
            conn.execute("DELETE FROM projects")
            conn.executemany(
                """
                INSERT INTO projects
                (id, position, name, notes, date, lens_ids, camera_ids)
                VALUES (?, ?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        str(project.id),
                        position,
                        project.name,
                        project.notes,
                        project.date.isoformat(),
                        json.dumps(project.lens_ids),
                        json.dumps(project.camera_ids),
                    )
                    for position, project in enumerate(projects)
                ],
            )

    def get_project(self, project_id: UUID) -> Project | None:
        """Get a specific project by ID.

        Args:
            project_id: UUID of the project

        Returns:
            Project if found, None otherwise
        """
        with self._get_connection() as conn:
            row = conn.execute(
                "SELECT * FROM projects WHERE id = ?", (str(project_id),)
            ).fetchone()
            if not row:
                return None
            return self._row_to_project(row)
