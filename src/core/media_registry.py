"""
Media Asset Registry - imported media of the active project.

Assets are keyed by id; iteration order is not meaningful. The registry is
cleared whenever the active project changes.
"""
from typing import Optional

from PyQt6.QtCore import QObject, pyqtSignal

from models.media import MediaAsset


class MediaAssetRegistry(QObject):
    """Central registry of media assets, with change notification."""

    changed = pyqtSignal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self._assets: dict[str, MediaAsset] = {}

    # -- Mutation ----------------------------------------------------------

    def add_asset(self, asset: MediaAsset) -> str:
        """Register *asset* and return its id."""
        self._assets[asset.id] = asset
        self.changed.emit()
        return asset.id

    def remove_asset(self, asset_id: str) -> Optional[MediaAsset]:
        """Remove and return the asset, or ``None`` if not found."""
        asset = self._assets.pop(asset_id, None)
        if asset is not None:
            self.changed.emit()
        return asset

    def clear_all_assets(self):
        self._assets.clear()
        self.changed.emit()

    # -- Query -------------------------------------------------------------

    def get_asset(self, asset_id: str) -> Optional[MediaAsset]:
        return self._assets.get(asset_id)

    @property
    def assets(self) -> list[MediaAsset]:
        """Snapshot of all registered assets."""
        return list(self._assets.values())

    def assets_of_type(self, media_type: str) -> list[MediaAsset]:
        return [a for a in self._assets.values() if a.media_type == media_type]

    def __len__(self) -> int:
        return len(self._assets)

    def __contains__(self, asset_id: str) -> bool:
        return asset_id in self._assets
