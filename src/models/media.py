"""
Media Assets - Imported media references for the active project.

Each MediaAsset holds metadata about a source file (uri, dimensions, duration).
Timeline elements reference media assets by id so that the timeline never
hard-couples to file locations.
"""
import uuid
from dataclasses import dataclass, field
from typing import Optional


MEDIA_TYPES = ("image", "video", "audio")


@dataclass
class MediaAsset:
    """A single imported media file.

    Attributes:
        id: Unique identifier referenced by timeline elements.
        name: Display name (usually the file name).
        media_type: "image" | "video" | "audio".
        uri: Location of the source file.
        width/height: Pixel dimensions for visual media.
        duration: Length in seconds for time-based media.
        thumbnail_uri: Optional preview image.
        file_size: Size in bytes.
    """
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = ""
    media_type: str = "image"
    uri: str = ""
    width: Optional[int] = None
    height: Optional[int] = None
    duration: Optional[float] = None
    thumbnail_uri: Optional[str] = None
    file_size: Optional[int] = None

    def __post_init__(self):
        if self.media_type not in MEDIA_TYPES:
            raise ValueError(f"Unknown media type: {self.media_type!r}")

    def to_dict(self) -> dict:
        d = {
            "id": self.id,
            "name": self.name,
            "media_type": self.media_type,
            "uri": self.uri,
        }
        # Optional metadata is only written when known
        for key in ("width", "height", "duration", "thumbnail_uri", "file_size"):
            value = getattr(self, key)
            if value is not None:
                d[key] = value
        return d

    @classmethod
    def from_dict(cls, data: dict) -> "MediaAsset":
        return cls(
            id=data.get("id", str(uuid.uuid4())),
            name=data.get("name", ""),
            media_type=data.get("media_type", "image"),
            uri=data.get("uri", ""),
            width=data.get("width"),
            height=data.get("height"),
            duration=data.get("duration"),
            thumbnail_uri=data.get("thumbnail_uri"),
            file_size=data.get("file_size"),
        )
