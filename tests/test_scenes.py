"""
Unit tests for SceneRegistry: initialization, active scene and bookmarks.
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.scenes import SceneRegistry
from models.timeline import Scene


class TestSceneRegistry(unittest.TestCase):
    def setUp(self):
        self.registry = SceneRegistry()
        self.main = Scene(name="Main scene", is_main=True)
        self.intro = Scene(name="Intro")

    def test_initialize_defaults_to_first_scene(self):
        self.registry.initialize_scenes([self.main, self.intro])
        self.assertEqual(self.registry.current_scene_id, self.main.id)
        self.assertIs(self.registry.get_active_scene(), self.main)

    def test_initialize_with_explicit_scene(self):
        self.registry.initialize_scenes([self.main, self.intro], self.intro.id)
        self.assertIs(self.registry.get_active_scene(), self.intro)

    def test_initialize_empty(self):
        self.registry.initialize_scenes([])
        self.assertEqual(self.registry.current_scene_id, "")
        self.assertIsNone(self.registry.get_active_scene())

    def test_set_active_scene(self):
        self.registry.initialize_scenes([self.main, self.intro])
        self.registry.set_active_scene(self.intro.id)
        self.assertIs(self.registry.get_active_scene(), self.intro)

    def test_set_active_scene_unknown_id_is_permissive(self):
        self.registry.initialize_scenes([self.main])
        self.registry.set_active_scene("does-not-exist")
        self.assertEqual(self.registry.current_scene_id, "does-not-exist")
        self.assertIsNone(self.registry.get_active_scene())

    def test_clear(self):
        self.registry.initialize_scenes([self.main])
        self.registry.clear_scenes()
        self.assertEqual(self.registry.scenes, [])
        self.assertIsNone(self.registry.get_active_scene())

    def test_changes_are_emitted(self):
        calls = []
        self.registry.changed.connect(lambda: calls.append(1))
        self.registry.initialize_scenes([self.main])
        self.registry.set_active_scene(self.main.id)
        self.registry.toggle_bookmark(1.0)
        self.registry.clear_scenes()
        self.assertEqual(len(calls), 4)


class TestBookmarks(unittest.TestCase):
    def setUp(self):
        self.registry = SceneRegistry()
        self.scene = Scene(name="Main scene", is_main=True)
        self.registry.initialize_scenes([self.scene])

    def test_toggle_twice_restores(self):
        self.registry.toggle_bookmark(2.5)
        before = list(self.scene.bookmarks)
        self.registry.toggle_bookmark(1.25)
        self.assertTrue(self.registry.is_bookmarked(1.25))
        self.registry.toggle_bookmark(1.25)
        self.assertFalse(self.registry.is_bookmarked(1.25))
        self.assertEqual(self.scene.bookmarks, before)

    def test_bookmarks_stay_sorted_and_unique(self):
        for t in [5.0, 1.0, 3.0, 1.0, 4.0, 0.5, 3.0, 2.0]:
            self.registry.toggle_bookmark(t)
        self.assertEqual(self.scene.bookmarks, [0.5, 2.0, 4.0, 5.0])
        self.assertEqual(self.scene.bookmarks, sorted(set(self.scene.bookmarks)))

    def test_no_active_scene(self):
        self.registry.clear_scenes()
        self.registry.toggle_bookmark(1.0)
        self.assertFalse(self.registry.is_bookmarked(1.0))


if __name__ == "__main__":
    unittest.main()
