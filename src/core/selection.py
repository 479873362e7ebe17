"""Selection Manager - the timeline elements currently selected in the UI."""
from typing import Iterable

from PyQt6.QtCore import QObject, pyqtSignal

from models.timeline import ElementRef


class SelectionManager(QObject):
    changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._selected: list[ElementRef] = []

    @property
    def selection(self) -> list[ElementRef]:
        return list(self._selected)

    def set_selection(self, refs: Iterable[ElementRef]):
        self._selected = list(refs)
        self.changed.emit()

    def clear_selection(self):
        self._selected = []
        self.changed.emit()

    def is_selected(self, ref: ElementRef) -> bool:
        return ref in self._selected
