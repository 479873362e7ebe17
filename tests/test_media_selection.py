"""
Unit tests for MediaAssetRegistry and SelectionManager.
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.media_registry import MediaAssetRegistry
from core.selection import SelectionManager
from models.media import MediaAsset
from models.timeline import ElementRef


class TestMediaAssetRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = MediaAssetRegistry()
        self.calls = 0
        self.registry.changed.connect(self._count)

    def _count(self):
        self.calls += 1

    def test_add_and_get(self):
        asset = MediaAsset(name="clip.mp4", media_type="video", uri="file:///clip.mp4")
        self.assertEqual(self.registry.add_asset(asset), asset.id)
        self.assertIs(self.registry.get_asset(asset.id), asset)
        self.assertIn(asset.id, self.registry)
        self.assertEqual(len(self.registry), 1)
        self.assertEqual(self.calls, 1)

    def test_remove(self):
        asset = MediaAsset(name="a.png", uri="file:///a.png")
        self.registry.add_asset(asset)
        self.assertIs(self.registry.remove_asset(asset.id), asset)
        self.assertIsNone(self.registry.remove_asset(asset.id))
        self.assertEqual(self.calls, 2)

    def test_assets_of_type(self):
        self.registry.add_asset(MediaAsset(name="a.png", media_type="image"))
        self.registry.add_asset(MediaAsset(name="b.mp3", media_type="audio"))
        self.registry.add_asset(MediaAsset(name="c.png", media_type="image"))
        self.assertEqual(len(self.registry.assets_of_type("image")), 2)
        self.assertEqual(len(self.registry.assets), 3)

    def test_assets_is_a_snapshot(self):
        self.registry.add_asset(MediaAsset(name="a.png"))
        snapshot = self.registry.assets
        snapshot.clear()
        self.assertEqual(len(self.registry), 1)

    def test_clear(self):
        self.registry.add_asset(MediaAsset(name="a.png"))
        self.registry.clear_all_assets()
        self.assertEqual(self.registry.assets, [])


class TestSelectionManager(unittest.TestCase):
    def test_set_get_clear(self):
        selection = SelectionManager()
        refs = [ElementRef("t1", "e1"), ElementRef("t1", "e2")]
        selection.set_selection(refs)
        self.assertEqual(selection.selection, refs)
        self.assertTrue(selection.is_selected(ElementRef("t1", "e2")))
        selection.clear_selection()
        self.assertEqual(selection.selection, [])
        self.assertFalse(selection.is_selected(ElementRef("t1", "e2")))

    def test_selection_is_copied(self):
        selection = SelectionManager()
        refs = [ElementRef("t1", "e1")]
        selection.set_selection(refs)
        refs.append(ElementRef("t2", "e2"))
        self.assertEqual(len(selection.selection), 1)


if __name__ == "__main__":
    unittest.main()
