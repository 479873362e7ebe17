"""
Timeline - Scenes, tracks and timed elements.

Elements are *instances* of content placed on a track. Their position in
scene time is ``start_time``/``duration``; ``trim_start``/``trim_end`` are
offsets into the underlying source media and are independent of placement.

Both elements and tracks are closed sets of variants. Each variant carries
a class-level discriminator (``element_type`` / ``track_type``) that is
written to the persisted record and used to dispatch on load.
"""
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, List, Optional

from config import DEFAULT_ELEMENT_DURATION
from models.timestamps import utc_now, format_timestamp, parse_timestamp


# ---------------------------------------------------------------------------
# Value types
# ---------------------------------------------------------------------------

@dataclass
class Point:
    x: float = 0.0
    y: float = 0.0

    def to_dict(self) -> dict:
        return {"x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "Point":
        return cls(x=data.get("x", 0.0), y=data.get("y", 0.0))


@dataclass
class Transform:
    """Placement of a visual element on the canvas."""
    scale: float = 1.0
    position: Point = field(default_factory=Point)
    rotate: float = 0.0  # degrees

    def to_dict(self) -> dict:
        return {
            "scale": self.scale,
            "position": self.position.to_dict(),
            "rotate": self.rotate,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Transform":
        return cls(
            scale=data.get("scale", 1.0),
            position=Point.from_dict(data.get("position", {})),
            rotate=data.get("rotate", 0.0),
        )


@dataclass(frozen=True)
class ElementRef:
    """Address of an element inside the active scene."""
    track_id: str
    element_id: str


# ---------------------------------------------------------------------------
# Timeline Elements (abstract base + concrete variants)
# ---------------------------------------------------------------------------

@dataclass
class TimelineElement:
    """Abstract base for anything placed on a track.

    Attributes:
        id: Unique identifier for this element.
        name: Display name.
        duration: Length on the timeline (seconds, > 0).
        start_time: Where the element begins in scene time (seconds, >= 0).
        trim_start: Seconds of source media skipped before the visible start.
        trim_end: Seconds of source media cut after the visible end.
    """
    element_type: ClassVar[str] = "generic"

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    duration: float = DEFAULT_ELEMENT_DURATION
    start_time: float = 0.0
    trim_start: float = 0.0
    trim_end: float = 0.0

    def __post_init__(self):
        if self.duration <= 0:
            raise ValueError(f"Element duration must be positive, got {self.duration}")
        if self.start_time < 0:
            raise ValueError(f"Element start_time must be >= 0, got {self.start_time}")
        if self.trim_start < 0 or self.trim_end < 0:
            raise ValueError("Element trim offsets must be >= 0")

    @property
    def end_time(self) -> float:
        return self.start_time + self.duration

    def contains(self, time: float) -> bool:
        """True if *time* falls strictly inside the occupied interval."""
        return self.start_time < time < self.end_time

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.element_type,
            "name": self.name,
            "duration": self.duration,
            "start_time": self.start_time,
            "trim_start": self.trim_start,
            "trim_end": self.trim_end,
        }

    @classmethod
    def _base_kwargs(cls, data: dict) -> dict:
        return {
            "id": data.get("id", str(uuid.uuid4())),
            "name": data.get("name", ""),
            "duration": data.get("duration", DEFAULT_ELEMENT_DURATION),
            "start_time": data.get("start_time", 0.0),
            "trim_start": data.get("trim_start", 0.0),
            "trim_end": data.get("trim_end", 0.0),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "TimelineElement":
        return cls(**cls._base_kwargs(data))


@dataclass
class VisualElement(TimelineElement):
    """Shared fields of elements that are drawn on the canvas.

    ``hidden`` is independent of the owning track's hidden flag.
    """
    hidden: bool = False
    transform: Transform = field(default_factory=Transform)
    opacity: float = 1.0

    def __post_init__(self):
        super().__post_init__()
        if not 0.0 <= self.opacity <= 1.0:
            raise ValueError(f"Opacity must be within [0, 1], got {self.opacity}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "hidden": self.hidden,
            "transform": self.transform.to_dict(),
            "opacity": self.opacity,
        })
        return d

    @classmethod
    def _base_kwargs(cls, data: dict) -> dict:
        kwargs = super()._base_kwargs(data)
        kwargs.update(
            hidden=data.get("hidden", False),
            transform=Transform.from_dict(data.get("transform", {})),
            opacity=data.get("opacity", 1.0),
        )
        return kwargs


@dataclass
class VideoElement(VisualElement):
    """A video clip referencing a video MediaAsset."""
    element_type: ClassVar[str] = "video"

    media_id: str = ""
    muted: bool = False

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({"media_id": self.media_id, "muted": self.muted})
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "VideoElement":
        return cls(
            **cls._base_kwargs(data),
            media_id=data.get("media_id", ""),
            muted=data.get("muted", False),
        )


@dataclass
class ImageElement(VisualElement):
    """A still image referencing an image MediaAsset."""
    element_type: ClassVar[str] = "image"

    media_id: str = ""

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["media_id"] = self.media_id
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "ImageElement":
        return cls(**cls._base_kwargs(data), media_id=data.get("media_id", ""))


TEXT_ALIGNS = ("left", "center", "right")


@dataclass
class TextElement(VisualElement):
    """A styled text overlay."""
    element_type: ClassVar[str] = "text"

    content: str = ""
    font_size: float = 48
    font_family: str = "System"
    color: str = "#FFFFFF"
    background_color: str = "transparent"
    text_align: str = "center"          # "left" | "center" | "right"
    font_weight: str = "normal"         # "normal" | "bold"
    font_style: str = "normal"          # "normal" | "italic"
    text_decoration: str = "none"       # "none" | "underline" | "line-through"

    def __post_init__(self):
        super().__post_init__()
        if self.text_align not in TEXT_ALIGNS:
            raise ValueError(f"Unknown text alignment: {self.text_align!r}")

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "content": self.content,
            "font_size": self.font_size,
            "font_family": self.font_family,
            "color": self.color,
            "background_color": self.background_color,
            "text_align": self.text_align,
            "font_weight": self.font_weight,
            "font_style": self.font_style,
            "text_decoration": self.text_decoration,
        })
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "TextElement":
        return cls(
            **cls._base_kwargs(data),
            content=data.get("content", ""),
            font_size=data.get("font_size", 48),
            font_family=data.get("font_family", "System"),
            color=data.get("color", "#FFFFFF"),
            background_color=data.get("background_color", "transparent"),
            text_align=data.get("text_align", "center"),
            font_weight=data.get("font_weight", "normal"),
            font_style=data.get("font_style", "normal"),
            text_decoration=data.get("text_decoration", "none"),
        )


@dataclass
class StickerElement(VisualElement):
    """An icon sticker drawn from the built-in sticker set."""
    element_type: ClassVar[str] = "sticker"

    icon_name: str = ""
    color: Optional[str] = None

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["icon_name"] = self.icon_name
        if self.color is not None:
            d["color"] = self.color
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "StickerElement":
        return cls(
            **cls._base_kwargs(data),
            icon_name=data.get("icon_name", ""),
            color=data.get("color"),
        )


@dataclass
class AudioElement(TimelineElement):
    """Abstract audio element; use one of the source variants below."""
    element_type: ClassVar[str] = "audio"
    source_type: ClassVar[str] = ""

    volume: float = 1.0
    muted: bool = False

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({
            "source_type": self.source_type,
            "volume": self.volume,
            "muted": self.muted,
        })
        return d

    @classmethod
    def _base_kwargs(cls, data: dict) -> dict:
        kwargs = super()._base_kwargs(data)
        kwargs.update(volume=data.get("volume", 1.0), muted=data.get("muted", False))
        return kwargs


@dataclass
class UploadAudioElement(AudioElement):
    """Audio taken from a media asset the user imported."""
    source_type: ClassVar[str] = "upload"

    media_id: str = ""

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["media_id"] = self.media_id
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "UploadAudioElement":
        return cls(**cls._base_kwargs(data), media_id=data.get("media_id", ""))


@dataclass
class LibraryAudioElement(AudioElement):
    """Audio streamed from the built-in sound library."""
    source_type: ClassVar[str] = "library"

    source_url: str = ""

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["source_url"] = self.source_url
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "LibraryAudioElement":
        return cls(**cls._base_kwargs(data), source_url=data.get("source_url", ""))


ELEMENT_CLASSES = {
    "video": VideoElement,
    "image": ImageElement,
    "text": TextElement,
    "sticker": StickerElement,
}

AUDIO_SOURCE_CLASSES = {
    "upload": UploadAudioElement,
    "library": LibraryAudioElement,
}


def element_from_dict(data: dict) -> TimelineElement:
    """Dispatch to the correct element variant based on *type*."""
    element_type = data.get("type")
    if element_type == "audio":
        source_type = data.get("source_type")
        if source_type not in AUDIO_SOURCE_CLASSES:
            raise ValueError(f"Unknown audio source type: {source_type!r}")
        return AUDIO_SOURCE_CLASSES[source_type].from_dict(data)
    if element_type not in ELEMENT_CLASSES:
        raise ValueError(f"Unknown element type: {element_type!r}")
    return ELEMENT_CLASSES[element_type].from_dict(data)


# ---------------------------------------------------------------------------
# Tracks
# ---------------------------------------------------------------------------

# Which track variant hosts each element type
ELEMENT_TRACK_TYPES = {
    "video": "video",
    "image": "video",
    "audio": "audio",
    "text": "text",
    "sticker": "sticker",
}


def track_type_for_element(element_type: str) -> str:
    """Return the track type that hosts *element_type*."""
    try:
        return ELEMENT_TRACK_TYPES[element_type]
    except KeyError:
        raise ValueError(f"Unknown element type: {element_type!r}") from None


@dataclass
class Track:
    """A typed lane holding timeline elements.

    Element order carries no meaning beyond iteration order; placement in
    time comes from each element's ``start_time``.
    """
    track_type: ClassVar[str] = "generic"

    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    elements: List[TimelineElement] = field(default_factory=list)

    def accepts(self, element: TimelineElement) -> bool:
        return ELEMENT_TRACK_TYPES.get(element.element_type) == self.track_type

    def add_element(self, element: TimelineElement) -> None:
        if not self.accepts(element):
            raise ValueError(
                f"{self.track_type} track cannot hold {element.element_type} elements"
            )
        self.elements.append(element)

    def remove_element(self, element_id: str) -> Optional[TimelineElement]:
        for i, element in enumerate(self.elements):
            if element.id == element_id:
                return self.elements.pop(i)
        return None

    def get_element(self, element_id: str) -> Optional[TimelineElement]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def index_of(self, element_id: str) -> int:
        for i, element in enumerate(self.elements):
            if element.id == element_id:
                return i
        return -1

    @property
    def end_time(self) -> float:
        ends = [element.end_time for element in self.elements]
        return max(ends) if ends else 0.0

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.track_type,
            "name": self.name,
            "elements": [element.to_dict() for element in self.elements],
        }

    @classmethod
    def _base_kwargs(cls, data: dict) -> dict:
        return {
            "id": data.get("id", str(uuid.uuid4())),
            "name": data.get("name", ""),
            "elements": [element_from_dict(e) for e in data.get("elements", [])],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Track":
        return cls(**cls._base_kwargs(data))


@dataclass
class VideoTrack(Track):
    """Holds video and image elements."""
    track_type: ClassVar[str] = "video"

    is_main: bool = False
    muted: bool = False
    hidden: bool = False

    def to_dict(self) -> dict:
        d = super().to_dict()
        d.update({"is_main": self.is_main, "muted": self.muted, "hidden": self.hidden})
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "VideoTrack":
        return cls(
            **cls._base_kwargs(data),
            is_main=data.get("is_main", False),
            muted=data.get("muted", False),
            hidden=data.get("hidden", False),
        )


@dataclass
class TextTrack(Track):
    track_type: ClassVar[str] = "text"

    hidden: bool = False

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["hidden"] = self.hidden
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "TextTrack":
        return cls(**cls._base_kwargs(data), hidden=data.get("hidden", False))


@dataclass
class AudioTrack(Track):
    track_type: ClassVar[str] = "audio"

    muted: bool = False

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["muted"] = self.muted
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "AudioTrack":
        return cls(**cls._base_kwargs(data), muted=data.get("muted", False))


@dataclass
class StickerTrack(Track):
    track_type: ClassVar[str] = "sticker"

    hidden: bool = False

    def to_dict(self) -> dict:
        d = super().to_dict()
        d["hidden"] = self.hidden
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "StickerTrack":
        return cls(**cls._base_kwargs(data), hidden=data.get("hidden", False))


TRACK_CLASSES = {
    "video": VideoTrack,
    "text": TextTrack,
    "audio": AudioTrack,
    "sticker": StickerTrack,
}


def create_track(track_type: str, name: str = "") -> Track:
    """Build an empty track of *track_type* with variant defaults."""
    if track_type not in TRACK_CLASSES:
        raise ValueError(f"Unknown track type: {track_type!r}")
    return TRACK_CLASSES[track_type](name=name)


def track_from_dict(data: dict) -> Track:
    """Dispatch to the correct track variant based on *type*."""
    track_type = data.get("type")
    if track_type not in TRACK_CLASSES:
        raise ValueError(f"Unknown track type: {track_type!r}")
    return TRACK_CLASSES[track_type].from_dict(data)


def tracks_end_time(tracks: List[Track]) -> float:
    """Latest ``start_time + duration`` across *tracks*, or 0 when empty."""
    return max((track.end_time for track in tracks), default=0.0)


# ---------------------------------------------------------------------------
# Scene
# ---------------------------------------------------------------------------

@dataclass
class Scene:
    """An independently addressable collection of tracks.

    Attributes:
        is_main: True for the scene a new project starts with.
        bookmarks: Bookmark times in seconds, ascending and de-duplicated.
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    is_main: bool = False
    tracks: List[Track] = field(default_factory=list)
    bookmarks: List[float] = field(default_factory=list)
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def get_track(self, track_id: str) -> Optional[Track]:
        for track in self.tracks:
            if track.id == track_id:
                return track
        return None

    def all_elements(self) -> list[TimelineElement]:
        """Flatten all elements across all tracks."""
        result: list[TimelineElement] = []
        for track in self.tracks:
            result.extend(track.elements)
        return result

    @property
    def duration(self) -> float:
        return tracks_end_time(self.tracks)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "is_main": self.is_main,
            "tracks": [t.to_dict() for t in self.tracks],
            "bookmarks": list(self.bookmarks),
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Scene":
        now = utc_now()
        return cls(
            id=data.get("id", str(uuid.uuid4())),
            name=data.get("name", ""),
            is_main=data.get("is_main", False),
            tracks=[track_from_dict(t) for t in data.get("tracks", [])],
            # Older records predate bookmarks
            bookmarks=sorted(set(data.get("bookmarks") or [])),
            created_at=parse_timestamp(data["created_at"]) if "created_at" in data else now,
            updated_at=parse_timestamp(data["updated_at"]) if "updated_at" in data else now,
        )
