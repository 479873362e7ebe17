"""
Editor Session - composition root for one editing session.

Owns every manager and re-emits all of their ``changed`` signals on a single
``changed`` signal, so a UI layer subscribes once. The application creates
one session and passes it to whatever needs it.
"""
import logging
from typing import Callable, Optional

from PyQt6.QtCore import QObject, pyqtSignal

from core.media_registry import MediaAssetRegistry
from core.playback import PlaybackClock
from core.project_manager import ProjectManager
from core.project_storage import ProjectStorage, ProjectStore
from core.scenes import SceneRegistry
from core.selection import SelectionManager
from core.timeline_engine import TimelineEngine

logger = logging.getLogger(__name__)


class EditorSession(QObject):
    """All state of the editor for the lifetime of the application.

    Attributes:
        playback: PlaybackClock
        scenes: SceneRegistry
        timeline: TimelineEngine (edits the active scene of ``scenes``)
        media: MediaAssetRegistry
        selection: SelectionManager
        project: ProjectManager
    """

    changed = pyqtSignal()

    def __init__(self, storage: Optional[ProjectStore] = None,
                 playback: Optional[PlaybackClock] = None, parent=None):
        super().__init__(parent)
        if storage is None:
            storage = ProjectStorage()

        self.playback = playback if playback is not None else PlaybackClock(parent=self)
        self.scenes = SceneRegistry(self)
        self.timeline = TimelineEngine(self.scenes, self)
        self.media = MediaAssetRegistry(self)
        self.selection = SelectionManager(self)
        self.project = ProjectManager(
            self.scenes, self.media, self.selection, storage, self
        )

        for manager in (self.playback, self.scenes, self.timeline,
                        self.media, self.selection, self.project):
            manager.changed.connect(self.changed)

        self._listeners: list[Callable[[], None]] = []
        self.changed.connect(self._notify_listeners)

    def subscribe(self, listener: Callable[[], None]) -> Callable[[], None]:
        """Call *listener* on every change; return a function that unsubscribes.

        Each notification goes to the listeners subscribed when it started,
        even if one of them unsubscribes another or subscribes a new one.
        """
        self._listeners.append(listener)
        subscribed = True

        def unsubscribe():
            nonlocal subscribed
            if subscribed:
                subscribed = False
                self._listeners.remove(listener)

        return unsubscribe

    def _notify_listeners(self):
        for listener in list(self._listeners):
            listener()

    def reset(self):
        """Return every manager to its initial state. Intended for tests."""
        self.playback.pause()
        self.playback.seek(0.0)
        self.project.close_project()
        self.project.clear_saved_projects()
        logger.debug("Session reset")
