"""
Project Manager - project lifecycle and the saved-project index.

Lifecycle is a three-state machine:

    IDLE ──load──> LOADING ──found──> ACTIVE
      ^               │
      └──not found────┘        create: IDLE/ACTIVE ──> ACTIVE
                               close / delete active: ──> IDLE

Scene ownership is split: the manager keeps the Project envelope (metadata,
settings) while SceneRegistry holds the live scenes. Loading pushes scenes
into the registry; saving reads them back out before persisting.

Storage round-trips are the only suspension points. Every operation that
replaces the active project bumps a generation counter, and a load whose
response arrives after a newer operation started is discarded.
"""
import logging
from dataclasses import replace
from enum import Enum
from typing import Iterable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from config import MAIN_SCENE_NAME, DEFAULT_VIDEO_TRACK_NAME
from core.media_registry import MediaAssetRegistry
from core.project_storage import ProjectStore
from core.scenes import SceneRegistry
from core.selection import SelectionManager
from models.project import (
    CanvasSize,
    ColorBackground,
    Project,
    ProjectMetadata,
    ProjectSettings,
    project_duration,
)
from models.timeline import Scene, VideoTrack
from models.timestamps import utc_now
from runtime_config import get_config

logger = logging.getLogger(__name__)


class ProjectState(str, Enum):
    """Lifecycle state of the active project."""
    IDLE = "idle"
    LOADING = "loading"
    ACTIVE = "active"


class ProjectNotFoundError(LookupError):
    """No stored project has the requested id."""

    def __init__(self, project_id: str):
        super().__init__(f"Project {project_id} not found")
        self.project_id = project_id


# Sort option keys accepted by get_filtered_and_sorted_projects ("<key>-<order>")
SORT_KEYS = {
    "name": lambda m: m.name.casefold(),
    "duration": lambda m: m.duration,
    "createdAt": lambda m: m.created_at,
    "updatedAt": lambda m: m.updated_at,
}


def build_default_scene(name: str, is_main: bool) -> Scene:
    """A scene holding one empty main video track."""
    return Scene(
        name=name,
        is_main=is_main,
        tracks=[VideoTrack(name=DEFAULT_VIDEO_TRACK_NAME, is_main=True)],
    )


class ProjectManager(QObject):
    """Create, load, save, rename, delete and list projects."""

    changed = pyqtSignal()
    state_changed = pyqtSignal(str)  # Emits the new ProjectState value

    def __init__(self, scenes: SceneRegistry, media: MediaAssetRegistry,
                 selection: SelectionManager, storage: ProjectStore, parent=None):
        super().__init__(parent)
        self._scenes = scenes
        self._media = media
        self._selection = selection
        self._storage = storage

        self._active: Optional[Project] = None
        self._state = ProjectState.IDLE
        self._saved_projects: list[ProjectMetadata] = []
        self._listing = False
        self._initialized = False
        self._generation = 0

    # -- State -------------------------------------------------------------

    @property
    def active_project(self) -> Optional[Project]:
        return self._active

    @property
    def state(self) -> ProjectState:
        return self._state

    @property
    def is_loading(self) -> bool:
        return self._state is ProjectState.LOADING or self._listing

    @property
    def is_initialized(self) -> bool:
        """True once the saved-project index has been fetched."""
        return self._initialized

    @property
    def saved_projects(self) -> list[ProjectMetadata]:
        return list(self._saved_projects)

    def _set_state(self, state: ProjectState):
        if state is self._state:
            return
        logger.debug("Project state %s -> %s", self._state.value, state.value)
        self._state = state
        self.state_changed.emit(state.value)

    def _clear_dependents(self):
        self._media.clear_all_assets()
        self._selection.clear_selection()
        self._scenes.clear_scenes()

    # -- Lifecycle ---------------------------------------------------------

    async def create_new_project(self, name: str) -> str:
        """Create, activate and persist a new project; return its id."""
        self._generation += 1
        config = get_config()
        main_scene = build_default_scene(MAIN_SCENE_NAME, is_main=True)
        now = utc_now()
        project = Project(
            metadata=ProjectMetadata(name=name, created_at=now, updated_at=now),
            scenes=[main_scene],
            current_scene_id=main_scene.id,
            settings=ProjectSettings(
                fps=config.fps,
                canvas_size=CanvasSize(config.canvas_width, config.canvas_height),
                background=ColorBackground(color=config.background_color),
            ),
        )

        self._active = project
        self._media.clear_all_assets()
        self._selection.clear_selection()
        self._scenes.initialize_scenes(list(project.scenes), project.current_scene_id)
        self._set_state(ProjectState.ACTIVE)

        await self._storage.save_project(project)
        self._upsert_metadata(project.metadata)
        logger.info("Created project %s (%s)", project.id, name)
        return project.id

    async def load_project(self, project_id: str) -> Optional[Project]:
        """Make the stored project *project_id* the active one.

        Media, selection and scenes are cleared before storage is queried.
        Raises ProjectNotFoundError when nothing is stored under the id; the
        manager is then left with no active project. Returns None when a
        newer load or create superseded this one.
        """
        self._generation += 1
        generation = self._generation
        self._active = None
        self._set_state(ProjectState.LOADING)
        self._clear_dependents()
        self.changed.emit()

        try:
            project = await self._storage.load_project(project_id)
        except Exception:
            if generation == self._generation:
                self._set_state(ProjectState.IDLE)
                self.changed.emit()
            raise

        if generation != self._generation:
            logger.debug("Discarding stale load of project %s", project_id)
            return None

        if project is None:
            self._set_state(ProjectState.IDLE)
            self.changed.emit()
            raise ProjectNotFoundError(project_id)

        self._active = project
        # A project without scenes leaves the (already cleared) registry as is
        if project.scenes:
            self._scenes.initialize_scenes(list(project.scenes), project.current_scene_id)
        self._set_state(ProjectState.ACTIVE)
        self.changed.emit()
        logger.info("Loaded project %s (%s)", project.id, project.metadata.name)
        return project

    async def save_current_project(self):
        """Persist the active project with the registry's live scenes."""
        if self._active is None:
            return
        generation = self._generation
        scenes = list(self._scenes.scenes)
        updated = replace(
            self._active,
            scenes=scenes,
            current_scene_id=self._scenes.current_scene_id or self._active.current_scene_id,
            metadata=replace(
                self._active.metadata,
                duration=project_duration(scenes),
                updated_at=utc_now(),
            ),
        )

        await self._storage.save_project(updated)
        if generation == self._generation:
            self._active = updated
        self._upsert_metadata(updated.metadata)
        logger.info("Saved project %s", updated.id)

    def close_project(self):
        """Drop the active project without touching storage."""
        self._generation += 1
        if self._active is not None:
            logger.info("Closed project %s", self._active.id)
        self._active = None
        self._clear_dependents()
        self._set_state(ProjectState.IDLE)
        self.changed.emit()

    # -- Saved projects ----------------------------------------------------

    async def load_all_projects_metadata(self) -> list[ProjectMetadata]:
        """Refresh the saved-project index from storage."""
        self._listing = True
        self.changed.emit()
        try:
            metadata = await self._storage.load_all_projects_metadata()
            self._saved_projects = list(metadata)
            self._initialized = True
        finally:
            self._listing = False
            self.changed.emit()
        return self.saved_projects

    def get_filtered_and_sorted_projects(self, search_query: str = "",
                                         sort_option: Optional[str] = None
                                         ) -> list[ProjectMetadata]:
        """Filter the index by name substring and sort it.

        *sort_option* is ``"<key>-<order>"`` with key one of name, duration,
        createdAt, updatedAt and order asc or desc. Unknown keys sort by
        updatedAt; any order other than asc is descending.
        """
        sort_option = sort_option or get_config().default_sort_option
        projects = list(self._saved_projects)

        query = search_query.strip().casefold()
        if query:
            projects = [p for p in projects if query in p.name.casefold()]

        sort_key, _, order = sort_option.partition("-")
        key = SORT_KEYS.get(sort_key, SORT_KEYS["updatedAt"])
        return sorted(projects, key=key, reverse=order != "asc")

    def clear_saved_projects(self):
        self._saved_projects = []
        self._initialized = False
        self.changed.emit()

    async def delete_projects(self, project_ids: Iterable[str]):
        """Delete projects from storage and the index.

        Deleting the active project also closes it. If storage fails partway,
        the projects deleted so far are already gone from the index and the
        error propagates.
        """
        deleted: set[str] = set()
        try:
            for project_id in project_ids:
                await self._storage.delete_project(project_id)
                deleted.add(project_id)
                self._saved_projects = [p for p in self._saved_projects
                                        if p.id != project_id]
        finally:
            if self._active is not None and self._active.id in deleted:
                self._generation += 1
                self._active = None
                self._clear_dependents()
                self._set_state(ProjectState.IDLE)
            self.changed.emit()
            logger.info("Deleted %d project(s)", len(deleted))

    async def rename_project(self, project_id: str, name: str):
        """Rename a stored project, whether or not it is the active one."""
        project = await self._storage.load_project(project_id)
        if project is None:
            logger.debug("Rename skipped: project %s not found", project_id)
            return

        renamed = replace(
            project,
            metadata=replace(project.metadata, name=name, updated_at=utc_now()),
        )
        await self._storage.save_project(renamed)

        if self._active is not None and self._active.id == project_id:
            self._active = replace(self._active, metadata=renamed.metadata)

        self._upsert_metadata(renamed.metadata)
        logger.info("Renamed project %s to %s", project_id, name)

    def _upsert_metadata(self, metadata: ProjectMetadata):
        for i, existing in enumerate(self._saved_projects):
            if existing.id == metadata.id:
                self._saved_projects[i] = metadata
                break
        else:
            self._saved_projects.insert(0, metadata)
        self.changed.emit()
