"""
Project - Root persisted unit of an editing session.

A project bundles:
  1. Metadata: the lightweight summary used for project listing
  2. Scenes: the timeline structure (tracks and elements)
  3. Settings: fps, canvas size and background

Projects are persisted as a whole; metadata is also stored on its own so
the project list can be built without loading any timeline.
"""
import json
import uuid
from dataclasses import dataclass, field
from datetime import datetime
from typing import ClassVar, List, Optional, Union

from config import (
    DEFAULT_FPS,
    DEFAULT_CANVAS_WIDTH,
    DEFAULT_CANVAS_HEIGHT,
    DEFAULT_BACKGROUND_COLOR,
    CURRENT_PROJECT_VERSION,
)
from models.timeline import Scene, tracks_end_time
from models.timestamps import utc_now, format_timestamp, parse_timestamp


# ---------------------------------------------------------------------------
# Settings
# ---------------------------------------------------------------------------

@dataclass
class CanvasSize:
    width: int = DEFAULT_CANVAS_WIDTH
    height: int = DEFAULT_CANVAS_HEIGHT

    def to_dict(self) -> dict:
        return {"width": self.width, "height": self.height}

    @classmethod
    def from_dict(cls, data: dict) -> "CanvasSize":
        return cls(
            width=data.get("width", DEFAULT_CANVAS_WIDTH),
            height=data.get("height", DEFAULT_CANVAS_HEIGHT),
        )


@dataclass
class ColorBackground:
    """Solid colour behind the canvas."""
    background_type: ClassVar[str] = "color"

    color: str = DEFAULT_BACKGROUND_COLOR

    def to_dict(self) -> dict:
        return {"type": self.background_type, "color": self.color}


@dataclass
class BlurBackground:
    """Blurred copy of the main video behind the canvas."""
    background_type: ClassVar[str] = "blur"

    blur_intensity: float = 8.0

    def to_dict(self) -> dict:
        return {"type": self.background_type, "blur_intensity": self.blur_intensity}


Background = Union[ColorBackground, BlurBackground]


def background_from_dict(data: dict) -> Background:
    background_type = data.get("type", "color")
    if background_type == "color":
        return ColorBackground(color=data.get("color", DEFAULT_BACKGROUND_COLOR))
    if background_type == "blur":
        return BlurBackground(blur_intensity=data.get("blur_intensity", 8.0))
    raise ValueError(f"Unknown background type: {background_type!r}")


@dataclass
class ProjectSettings:
    """Render settings of a project.

    Attributes:
        original_canvas_size: Canvas size before the user picked a preset,
            if the canvas was ever changed.
    """
    fps: int = DEFAULT_FPS
    canvas_size: CanvasSize = field(default_factory=CanvasSize)
    original_canvas_size: Optional[CanvasSize] = None
    background: Background = field(default_factory=ColorBackground)

    def to_dict(self) -> dict:
        return {
            "fps": self.fps,
            "canvas_size": self.canvas_size.to_dict(),
            "original_canvas_size": (
                self.original_canvas_size.to_dict()
                if self.original_canvas_size is not None else None
            ),
            "background": self.background.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectSettings":
        original = data.get("original_canvas_size")
        return cls(
            fps=data.get("fps", DEFAULT_FPS),
            canvas_size=CanvasSize.from_dict(data.get("canvas_size", {})),
            original_canvas_size=CanvasSize.from_dict(original) if original else None,
            background=background_from_dict(data.get("background", {})),
        )


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

@dataclass
class ProjectMetadata:
    """Summary of a project as shown in the project list."""
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    name: str = "Untitled"
    duration: float = 0.0
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "duration": self.duration,
            "created_at": format_timestamp(self.created_at),
            "updated_at": format_timestamp(self.updated_at),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProjectMetadata":
        return cls(
            id=data["id"],
            name=data.get("name", "Untitled"),
            duration=data.get("duration", 0.0),
            created_at=parse_timestamp(data["created_at"]),
            updated_at=parse_timestamp(data["updated_at"]),
        )


# ---------------------------------------------------------------------------
# Project
# ---------------------------------------------------------------------------

@dataclass
class Project:
    """Root object of a project.

    Attributes:
        current_scene_id: Scene that was active when the project was saved.
        version: Schema version of the persisted record.
    """
    metadata: ProjectMetadata = field(default_factory=ProjectMetadata)
    scenes: List[Scene] = field(default_factory=list)
    current_scene_id: str = ""
    settings: ProjectSettings = field(default_factory=ProjectSettings)
    version: int = CURRENT_PROJECT_VERSION

    @property
    def id(self) -> str:
        return self.metadata.id

    # -- Serialization -----------------------------------------------------

    def to_dict(self) -> dict:
        return {
            "version": self.version,
            "metadata": self.metadata.to_dict(),
            "scenes": [scene.to_dict() for scene in self.scenes],
            "current_scene_id": self.current_scene_id,
            "settings": self.settings.to_dict(),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Project":
        return cls(
            metadata=ProjectMetadata.from_dict(data["metadata"]),
            scenes=[Scene.from_dict(s) for s in data.get("scenes") or []],
            current_scene_id=data.get("current_scene_id", ""),
            settings=ProjectSettings.from_dict(data.get("settings", {})),
            version=data.get("version", CURRENT_PROJECT_VERSION),
        )


def project_duration(scenes: List[Scene]) -> float:
    """Latest element end time across every scene, or 0 for an empty project."""
    return max((tracks_end_time(scene.tracks) for scene in scenes), default=0.0)


def serialize_project(project: Project) -> str:
    return json.dumps(project.to_dict())


def deserialize_project(raw: str) -> Project:
    return Project.from_dict(json.loads(raw))
