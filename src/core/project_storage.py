"""
Project Storage - QSettings-based persistence for projects.

Key layout inside one settings store:

    projects/<id>     serialized project (JSON text)
    metadata/<id>     serialized ProjectMetadata (JSON text)
    projects_index    JSON list of known project ids

Listing reads only the index and metadata records, so it never has to
deserialize a timeline.
"""
import json
import logging
from typing import Optional, Protocol

from PyQt6.QtCore import QSettings

from config import STORAGE_ORGANIZATION, STORAGE_APPLICATION
from models.project import (
    Project,
    ProjectMetadata,
    serialize_project,
    deserialize_project,
)

logger = logging.getLogger(__name__)


class StorageError(RuntimeError):
    """The settings backend failed to read or write."""


class ProjectStore(Protocol):
    """Persistence contract consumed by ProjectManager."""

    async def save_project(self, project: Project) -> None: ...

    async def load_project(self, project_id: str) -> Optional[Project]: ...

    async def load_all_projects_metadata(self) -> list[ProjectMetadata]: ...

    async def delete_project(self, project_id: str) -> None: ...


class ProjectStorage:
    """Persist projects in a QSettings store."""

    PROJECT_KEY_PREFIX = "projects/"
    METADATA_KEY_PREFIX = "metadata/"
    INDEX_KEY = "projects_index"

    def __init__(self, settings: Optional[QSettings] = None):
        if settings is None:
            settings = QSettings(STORAGE_ORGANIZATION, STORAGE_APPLICATION)
        self.settings = settings

    # -- ProjectStore ------------------------------------------------------

    async def save_project(self, project: Project) -> None:
        self.settings.setValue(self._project_key(project.id), serialize_project(project))
        self.settings.setValue(
            self._metadata_key(project.id), json.dumps(project.metadata.to_dict())
        )
        ids = self._get_index()
        if project.id not in ids:
            ids.append(project.id)
            self._set_index(ids)
        self._sync()

    async def load_project(self, project_id: str) -> Optional[Project]:
        raw = self._get_text(self._project_key(project_id))
        if not raw:
            return None
        return deserialize_project(raw)

    async def load_all_projects_metadata(self) -> list[ProjectMetadata]:
        """Return metadata for every indexed project, newest first."""
        metadata: list[ProjectMetadata] = []
        for project_id in self._get_index():
            raw = self._get_text(self._metadata_key(project_id))
            if raw:
                metadata.append(ProjectMetadata.from_dict(json.loads(raw)))
                continue
            # Records saved before metadata was split out
            project = await self.load_project(project_id)
            if project is not None:
                metadata.append(project.metadata)
        metadata.sort(key=lambda m: m.updated_at, reverse=True)
        return metadata

    async def delete_project(self, project_id: str) -> None:
        self.settings.remove(self._project_key(project_id))
        self.settings.remove(self._metadata_key(project_id))
        ids = self._get_index()
        if project_id in ids:
            self._set_index([i for i in ids if i != project_id])
        self._sync()

    # -- Internals ---------------------------------------------------------

    def _project_key(self, project_id: str) -> str:
        return f"{self.PROJECT_KEY_PREFIX}{project_id}"

    def _metadata_key(self, project_id: str) -> str:
        return f"{self.METADATA_KEY_PREFIX}{project_id}"

    def _get_text(self, key: str) -> Optional[str]:
        value = self.settings.value(key, "", type=str)
        return value or None

    def _get_index(self) -> list[str]:
        raw = self._get_text(self.INDEX_KEY)
        if not raw:
            return []
        return list(json.loads(raw))

    def _set_index(self, ids: list[str]):
        self.settings.setValue(self.INDEX_KEY, json.dumps(ids))

    def _sync(self):
        self.settings.sync()
        status = self.settings.status()
        if status != QSettings.Status.NoError:
            raise StorageError(f"Settings store write failed: {status.name}")
