"""
ReelCut Data Models.

Public API:

  Media:
    MediaAsset

  Timeline:
    Scene, Track, VideoTrack, TextTrack, AudioTrack, StickerTrack
    TimelineElement, VideoElement, ImageElement, TextElement, StickerElement
    AudioElement, UploadAudioElement, LibraryAudioElement
    Transform, Point, ElementRef

  Project:
    Project, ProjectMetadata, ProjectSettings, CanvasSize
    ColorBackground, BlurBackground
"""

from models.media import MediaAsset
from models.timeline import (
    Point,
    Transform,
    ElementRef,
    TimelineElement,
    VideoElement,
    ImageElement,
    TextElement,
    StickerElement,
    AudioElement,
    UploadAudioElement,
    LibraryAudioElement,
    Track,
    VideoTrack,
    TextTrack,
    AudioTrack,
    StickerTrack,
    Scene,
)
from models.project import (
    CanvasSize,
    ColorBackground,
    BlurBackground,
    ProjectSettings,
    ProjectMetadata,
    Project,
)

__all__ = [
    # Media
    "MediaAsset",
    # Timeline
    "Point",
    "Transform",
    "ElementRef",
    "TimelineElement",
    "VideoElement",
    "ImageElement",
    "TextElement",
    "StickerElement",
    "AudioElement",
    "UploadAudioElement",
    "LibraryAudioElement",
    "Track",
    "VideoTrack",
    "TextTrack",
    "AudioTrack",
    "StickerTrack",
    "Scene",
    # Project
    "CanvasSize",
    "ColorBackground",
    "BlurBackground",
    "ProjectSettings",
    "ProjectMetadata",
    "Project",
]
