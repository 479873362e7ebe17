"""
ReelCut Configuration
"""
import os

# Project defaults
DEFAULT_FPS = 30
DEFAULT_CANVAS_WIDTH = 1080
DEFAULT_CANVAS_HEIGHT = 1920
DEFAULT_BACKGROUND_COLOR = "#000000"
CURRENT_PROJECT_VERSION = 1

# Timeline defaults
MAIN_SCENE_NAME = "Main scene"
DEFAULT_VIDEO_TRACK_NAME = "Video 1"
DEFAULT_ELEMENT_DURATION = 5.0  # seconds

# Playback
PLAYBACK_TICK_INTERVAL_MS = 16  # ~60 fps

# Project list
DEFAULT_SORT_OPTION = "updatedAt-desc"

# Storage (QSettings scope)
STORAGE_ORGANIZATION = "ReelCut"
STORAGE_APPLICATION = "ReelCutProjects"

# Logging
LOG_LEVEL = os.environ.get("REELCUT_LOG_LEVEL", "INFO")
LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
