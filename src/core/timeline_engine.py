"""
Timeline Engine - track and element editing on the active scene.

All operations act on the scene SceneRegistry reports as active. With no
active scene every mutation is a no-op and nothing is emitted. References to
tracks or elements that no longer exist are skipped silently, since the UI
can hold references that a previous edit already removed.

Each mutating call emits ``changed`` exactly once, after the whole batch has
been applied. An explicit insert that places nothing emits nothing.
"""
import copy
import logging
import uuid
from dataclasses import dataclass, replace
from typing import Iterable, Optional, Union

from PyQt6.QtCore import QObject, pyqtSignal

from core.scenes import SceneRegistry
from models.timeline import (
    ElementRef,
    TimelineElement,
    Track,
    create_track,
    track_type_for_element,
    tracks_end_time,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AutoPlacement:
    """Let the engine pick (or create) a compatible track."""


@dataclass(frozen=True)
class ExplicitPlacement:
    """Insert into the named track."""
    track_id: str


Placement = Union[AutoPlacement, ExplicitPlacement]

RETAIN_SIDES = ("left", "right")


class TimelineEngine(QObject):
    changed = pyqtSignal()

    def __init__(self, scenes: SceneRegistry, parent=None):
        super().__init__(parent)
        self._scenes = scenes

    # -- Query -------------------------------------------------------------

    def get_tracks(self) -> list[Track]:
        scene = self._scenes.get_active_scene()
        return scene.tracks if scene is not None else []

    def get_track(self, track_id: str) -> Optional[Track]:
        scene = self._scenes.get_active_scene()
        return scene.get_track(track_id) if scene is not None else None

    def get_element(self, ref: ElementRef) -> Optional[TimelineElement]:
        track = self.get_track(ref.track_id)
        return track.get_element(ref.element_id) if track is not None else None

    def get_total_duration(self) -> float:
        """End of the last element on the active scene, or 0 when empty."""
        return tracks_end_time(self.get_tracks())

    # -- Tracks ------------------------------------------------------------

    def add_track(self, track_type: str, index: Optional[int] = None) -> str:
        """Create a track of *track_type* and return its id.

        The track is inserted at *index* when given, otherwise appended.
        Returns an empty string when there is no active scene.
        """
        scene = self._scenes.get_active_scene()
        if scene is None:
            return ""
        track = self._create_track(scene.tracks, track_type, index)
        self.changed.emit()
        return track.id

    def _create_track(self, tracks: list[Track], track_type: str,
                      index: Optional[int]) -> Track:
        track = create_track(track_type, name=f"{track_type} {len(tracks) + 1}")
        if index is None:
            tracks.append(track)
        else:
            tracks.insert(index, track)
        return track

    # -- Elements ----------------------------------------------------------

    def insert_element(self, element: TimelineElement,
                       placement: Placement = AutoPlacement()) -> Optional[str]:
        """Place *element* on a track of the active scene.

        Explicit placement into a missing or incompatible track inserts
        nothing and emits nothing. Auto placement uses the first compatible
        track, creating one when the scene has none. Returns the element id,
        or None when nothing was inserted.
        """
        scene = self._scenes.get_active_scene()
        if scene is None:
            return None

        inserted = False
        if isinstance(placement, ExplicitPlacement):
            track = scene.get_track(placement.track_id)
            if track is None:
                logger.debug("Insert skipped: track %s not found", placement.track_id)
            elif not track.accepts(element):
                logger.warning("Insert skipped: %s track %s cannot hold %s elements",
                               track.track_type, track.id, element.element_type)
            else:
                track.add_element(element)
                inserted = True
        elif isinstance(placement, AutoPlacement):
            track = next((t for t in scene.tracks if t.accepts(element)), None)
            if track is None:
                track_type = track_type_for_element(element.element_type)
                track = self._create_track(scene.tracks, track_type, None)
            track.add_element(element)
            inserted = True
        else:
            raise TypeError(f"Unknown placement: {placement!r}")

        if not inserted:
            return None
        self.changed.emit()
        return element.id

    def delete_elements(self, refs: Iterable[ElementRef]):
        """Remove every referenced element; absent ones are skipped."""
        scene = self._scenes.get_active_scene()
        if scene is None:
            return
        for ref in refs:
            track = scene.get_track(ref.track_id)
            if track is not None:
                track.remove_element(ref.element_id)
        self.changed.emit()

    def split_elements(self, refs: Iterable[ElementRef], split_time: float,
                       retain_side: Optional[str] = None):
        """Split each referenced element at *split_time*.

        Elements whose interior does not contain *split_time* are left as
        they are. With *retain_side* "left" or "right" only that part is
        kept in place; otherwise the element is replaced by both parts and
        the right part gets a new id.
        """
        if retain_side is not None and retain_side not in RETAIN_SIDES:
            raise ValueError(f"retain_side must be 'left', 'right' or None, got {retain_side!r}")
        scene = self._scenes.get_active_scene()
        if scene is None:
            return

        for ref in refs:
            track = scene.get_track(ref.track_id)
            if track is None:
                continue
            index = track.index_of(ref.element_id)
            if index == -1:
                continue
            element = track.elements[index]
            if not element.contains(split_time):
                logger.debug("Split at %.3fs outside element %s", split_time, element.id)
                continue

            left_duration = split_time - element.start_time
            right_duration = element.end_time - split_time

            if retain_side == "left":
                track.elements[index] = replace(element, duration=left_duration)
            elif retain_side == "right":
                track.elements[index] = replace(
                    element,
                    start_time=split_time,
                    duration=right_duration,
                    trim_start=element.trim_start + left_duration,
                )
            else:
                left = replace(element, duration=left_duration)
                right = replace(
                    copy.deepcopy(element),
                    id=str(uuid.uuid4()),
                    start_time=split_time,
                    duration=right_duration,
                    trim_start=element.trim_start + left_duration,
                )
                track.elements[index:index + 1] = [left, right]

        self.changed.emit()
