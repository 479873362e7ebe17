"""
Scene Registry - scene list and active-scene pointer of the open project.

The registry owns the live scene objects; TimelineEngine mutates the tracks
of the active scene in place and ProjectManager reads the list back when
saving.
"""
import bisect
import logging
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from models.timeline import Scene

logger = logging.getLogger(__name__)


class SceneRegistry(QObject):
    changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._scenes: list[Scene] = []
        self._current_scene_id = ""

    @property
    def scenes(self) -> list[Scene]:
        return self._scenes

    @property
    def current_scene_id(self) -> str:
        return self._current_scene_id

    def initialize_scenes(self, scenes: list[Scene], current_scene_id: str = ""):
        """Replace the registry contents wholesale.

        An empty *current_scene_id* selects the first scene (or nothing when
        *scenes* is empty).
        """
        self._scenes = scenes
        self._current_scene_id = current_scene_id or (scenes[0].id if scenes else "")
        self.changed.emit()

    def get_active_scene(self) -> Optional[Scene]:
        for scene in self._scenes:
            if scene.id == self._current_scene_id:
                return scene
        return None

    def get_scene(self, scene_id: str) -> Optional[Scene]:
        for scene in self._scenes:
            if scene.id == scene_id:
                return scene
        return None

    def set_active_scene(self, scene_id: str):
        """Point the registry at *scene_id*.

        Membership is not checked: callers only switch to ids they got from
        ``scenes``. An unknown id leaves ``get_active_scene()`` returning None.
        """
        if self.get_scene(scene_id) is None:
            logger.warning("Active scene set to unknown id %s", scene_id)
        self._current_scene_id = scene_id
        self.changed.emit()

    def clear_scenes(self):
        self._scenes = []
        self._current_scene_id = ""
        self.changed.emit()

    # -- Bookmarks ---------------------------------------------------------

    def toggle_bookmark(self, time_seconds: float):
        """Remove the bookmark at exactly *time_seconds*, or add it in order."""
        scene = self.get_active_scene()
        if scene is None:
            return
        if time_seconds in scene.bookmarks:
            scene.bookmarks.remove(time_seconds)
        else:
            bisect.insort(scene.bookmarks, time_seconds)
        self.changed.emit()

    def is_bookmarked(self, time_seconds: float) -> bool:
        scene = self.get_active_scene()
        return scene is not None and time_seconds in scene.bookmarks
