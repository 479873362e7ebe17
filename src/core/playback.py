"""
Playback Clock - elapsed playback position and play/pause state.

Time advances by the wall-clock delta between consecutive ticks rather than
from a single origin recorded at play(), so a late frame only delays the
update instead of skewing it. Ticks are a chain of single-shot timers: each
tick re-arms the timer only while still playing, so pause() just stops the
pending shot.
"""
import logging
import time
from typing import Callable, Optional

from PyQt6.QtCore import QObject, QTimer, pyqtSignal

from runtime_config import get_config

logger = logging.getLogger(__name__)


class PlaybackClock(QObject):
    """Two-state (paused/playing) clock with a continuous position in seconds."""

    changed = pyqtSignal()
    time_changed = pyqtSignal(float)  # Emits current time in seconds

    def __init__(self, tick_interval_ms: Optional[int] = None,
                 clock: Callable[[], float] = time.monotonic, parent=None):
        super().__init__(parent)
        if tick_interval_ms is None:
            tick_interval_ms = get_config().playback_tick_interval_ms
        self._clock = clock
        self._current_time = 0.0
        self._playing = False
        self._last_timestamp = 0.0

        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setInterval(tick_interval_ms)
        self._timer.timeout.connect(self._tick)

    @property
    def current_time(self) -> float:
        return self._current_time

    @property
    def is_playing(self) -> bool:
        return self._playing

    def play(self):
        if self._playing:
            return
        self._playing = True
        self._last_timestamp = self._clock()
        self._timer.start()
        logger.debug("Playback started at %.3fs", self._current_time)
        self.changed.emit()

    def pause(self):
        if not self._playing:
            return
        self._playing = False
        self._timer.stop()
        logger.debug("Playback paused at %.3fs", self._current_time)
        self.changed.emit()

    def toggle(self):
        if self._playing:
            self.pause()
        else:
            self.play()

    def seek(self, time_seconds: float):
        """Jump to *time_seconds* (clamped at 0) without changing play state."""
        self._current_time = max(0.0, time_seconds)
        self.time_changed.emit(self._current_time)
        self.changed.emit()

    def _tick(self):
        if not self._playing:
            return
        now = self._clock()
        delta = now - self._last_timestamp
        self._last_timestamp = now
        self._current_time += delta
        self.time_changed.emit(self._current_time)
        self.changed.emit()
        # A listener may have paused playback
        if self._playing:
            self._timer.start()
