"""
Unit tests for TimelineEngine: track insertion, placement, deletion and splitting.
"""
import os
import sys
import unittest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from core.scenes import SceneRegistry
from core.timeline_engine import AutoPlacement, ExplicitPlacement, TimelineEngine
from models.timeline import (
    AudioTrack,
    ElementRef,
    ImageElement,
    LibraryAudioElement,
    Point,
    Scene,
    StickerElement,
    TextElement,
    Transform,
    UploadAudioElement,
    VideoElement,
    VideoTrack,
)


class TimelineTestCase(unittest.TestCase):
    def setUp(self):
        self.main_track = VideoTrack(name="Video 1", is_main=True)
        self.scene = Scene(name="Main scene", is_main=True, tracks=[self.main_track])
        self.scenes = SceneRegistry()
        self.scenes.initialize_scenes([self.scene])
        self.engine = TimelineEngine(self.scenes)
        self.notifications = 0
        self.engine.changed.connect(self._on_changed)

    def _on_changed(self):
        self.notifications += 1

    def _place(self, element, track=None):
        track = track or self.main_track
        self.engine.insert_element(element, ExplicitPlacement(track.id))
        self.notifications = 0
        return ElementRef(track.id, element.id)


class TestTracks(TimelineTestCase):
    def test_add_track_appends(self):
        track_id = self.engine.add_track("audio")
        tracks = self.engine.get_tracks()
        self.assertEqual(len(tracks), 2)
        self.assertEqual(tracks[-1].id, track_id)
        self.assertIsInstance(tracks[-1], AudioTrack)
        self.assertEqual(tracks[-1].name, "audio 2")
        self.assertEqual(self.notifications, 1)

    def test_add_track_at_index(self):
        first = self.engine.add_track("text")
        inserted = self.engine.add_track("sticker", index=0)
        ids = [t.id for t in self.engine.get_tracks()]
        self.assertEqual(ids, [inserted, self.main_track.id, first])

    def test_new_video_track_is_not_main(self):
        track_id = self.engine.add_track("video")
        self.assertFalse(self.engine.get_track(track_id).is_main)

    def test_no_active_scene(self):
        self.scenes.clear_scenes()
        self.notifications = 0
        self.assertEqual(self.engine.add_track("video"), "")
        self.assertIsNone(self.engine.insert_element(VideoElement()))
        self.engine.delete_elements([ElementRef("t", "e")])
        self.engine.split_elements([ElementRef("t", "e")], 1.0)
        self.assertEqual(self.engine.get_tracks(), [])
        self.assertEqual(self.engine.get_total_duration(), 0.0)
        self.assertEqual(self.notifications, 0)


class TestInsertElement(TimelineTestCase):
    def test_auto_uses_first_matching_track(self):
        image = ImageElement(media_id="img")
        self.engine.insert_element(image)
        self.assertIs(self.main_track.elements[0], image)
        self.assertEqual(len(self.engine.get_tracks()), 1)

    def test_auto_creates_missing_track_with_one_notification(self):
        audio = UploadAudioElement(media_id="a1")
        element_id = self.engine.insert_element(audio, AutoPlacement())
        tracks = self.engine.get_tracks()
        self.assertEqual(len(tracks), 2)
        self.assertIsInstance(tracks[1], AudioTrack)
        self.assertEqual(tracks[1].elements, [audio])
        self.assertEqual(element_id, audio.id)
        self.assertEqual(self.notifications, 1)

    def test_auto_matches_each_type(self):
        for element, track_type in [
            (TextElement(content="hi"), "text"),
            (StickerElement(icon_name="star"), "sticker"),
            (LibraryAudioElement(source_url="lib://x"), "audio"),
            (VideoElement(), "video"),
        ]:
            self.engine.insert_element(element)
            track = next(t for t in self.engine.get_tracks() if element in t.elements)
            self.assertEqual(track.track_type, track_type)
        # second text element reuses the text track
        self.engine.insert_element(TextElement(content="again"))
        self.assertEqual(len(self.engine.get_tracks()), 4)

    def test_caller_supplied_id_kept(self):
        element = VideoElement(id="fixed-id")
        self.assertEqual(self.engine.insert_element(element), "fixed-id")
        self.assertEqual(self.main_track.elements[0].id, "fixed-id")

    def test_generated_ids_unique(self):
        a, b = VideoElement(), VideoElement()
        self.assertNotEqual(a.id, b.id)

    def test_explicit_missing_track_ignored(self):
        result = self.engine.insert_element(VideoElement(), ExplicitPlacement("nope"))
        self.assertIsNone(result)
        self.assertEqual(self.main_track.elements, [])
        self.assertEqual(self.notifications, 0)

    def test_explicit_incompatible_track_ignored(self):
        result = self.engine.insert_element(TextElement(), ExplicitPlacement(self.main_track.id))
        self.assertIsNone(result)
        self.assertEqual(self.main_track.elements, [])
        self.assertEqual(self.notifications, 0)

    def test_explicit_insert_notifies_once(self):
        self.engine.insert_element(VideoElement(), ExplicitPlacement(self.main_track.id))
        self.assertEqual(self.notifications, 1)

    def test_total_duration(self):
        self.assertEqual(self.engine.get_total_duration(), 0.0)
        self.engine.insert_element(VideoElement(start_time=0.0, duration=3.0))
        self.engine.insert_element(TextElement(start_time=2.0, duration=6.5))
        self.engine.add_track("sticker")
        self.engine.insert_element(UploadAudioElement(start_time=1.0, duration=4.0))
        self.assertAlmostEqual(self.engine.get_total_duration(), 8.5)


class TestDeleteElements(TimelineTestCase):
    def test_delete_is_idempotent(self):
        keep = VideoElement(start_time=5.0)
        ref = self._place(VideoElement())
        self._place(keep)
        self.engine.delete_elements([ref])
        after_once = list(self.main_track.elements)
        self.engine.delete_elements([ref])
        self.assertEqual(self.main_track.elements, after_once)
        self.assertEqual(self.main_track.elements, [keep])

    def test_missing_track_skipped(self):
        ref = self._place(VideoElement())
        self.engine.delete_elements([ElementRef("missing", "x"), ref])
        self.assertEqual(self.main_track.elements, [])
        self.assertEqual(self.notifications, 1)


class TestSplitElements(TimelineTestCase):
    def _element(self):
        return VideoElement(
            media_id="m1",
            start_time=2.0,
            duration=6.0,
            trim_start=1.0,
            trim_end=0.5,
            transform=Transform(scale=1.5, position=Point(3, 4), rotate=10.0),
            opacity=0.8,
        )

    def test_split_both_sides(self):
        original = self._element()
        ref = self._place(original)
        self.engine.split_elements([ref], 5.0)

        left, right = self.main_track.elements
        self.assertEqual(left.id, original.id)
        self.assertNotEqual(right.id, original.id)
        self.assertAlmostEqual(left.duration + right.duration, original.duration)
        self.assertAlmostEqual(left.start_time, 2.0)
        self.assertAlmostEqual(left.duration, 3.0)
        self.assertAlmostEqual(left.trim_start, 1.0)
        self.assertAlmostEqual(right.start_time, 5.0)
        self.assertAlmostEqual(right.duration, 3.0)
        self.assertAlmostEqual(right.trim_start, original.trim_start + left.duration)
        self.assertEqual(right.media_id, "m1")
        self.assertEqual(right.transform, original.transform)
        self.assertIsNot(right.transform, left.transform)
        self.assertEqual(self.notifications, 1)

    def test_split_at_midpoint_keeps_source_alignment(self):
        original = self._element()
        ref = self._place(original)
        midpoint = original.start_time + original.duration / 2
        self.engine.split_elements([ref], midpoint)
        left, right = self.main_track.elements
        # right part starts in the source exactly where the left part stops
        self.assertAlmostEqual(left.trim_start + left.duration, right.trim_start)
        self.assertAlmostEqual(right.trim_start - original.trim_start, original.duration / 2)

    def test_retain_left(self):
        original = self._element()
        ref = self._place(original)
        self.engine.split_elements([ref], 4.0, retain_side="left")
        (kept,) = self.main_track.elements
        self.assertEqual(kept.id, original.id)
        self.assertAlmostEqual(kept.start_time, 2.0)
        self.assertAlmostEqual(kept.duration, 2.0)
        self.assertAlmostEqual(kept.trim_start, 1.0)

    def test_retain_right(self):
        original = self._element()
        ref = self._place(original)
        self.engine.split_elements([ref], 4.0, retain_side="right")
        (kept,) = self.main_track.elements
        self.assertEqual(kept.id, original.id)
        self.assertAlmostEqual(kept.start_time, 4.0)
        self.assertAlmostEqual(kept.duration, 4.0)
        self.assertAlmostEqual(kept.trim_start, 3.0)

    def test_split_at_edges_is_noop(self):
        original = self._element()
        ref = self._place(original)
        before = list(self.main_track.elements)
        for split_time in (0.0, 2.0, 8.0, 12.0):
            self.engine.split_elements([ref], split_time)
            self.engine.split_elements([ref], split_time, retain_side="right")
        self.assertEqual(self.main_track.elements, before)
        self.assertIs(self.main_track.elements[0], original)

    def test_split_multiple_with_missing_refs(self):
        a = self._place(VideoElement(start_time=0.0, duration=4.0))
        audio_track = self.engine.get_track(self.engine.add_track("audio"))
        b = self._place(UploadAudioElement(start_time=1.0, duration=2.0, media_id="a"), audio_track)
        self.engine.split_elements([a, ElementRef(audio_track.id, "gone"), b], 2.0)
        self.assertEqual(len(self.main_track.elements), 2)
        self.assertEqual(len(audio_track.elements), 2)
        self.assertEqual(audio_track.elements[1].media_id, "a")
        self.assertEqual(self.notifications, 1)

    def test_invalid_retain_side(self):
        ref = self._place(self._element())
        with self.assertRaises(ValueError):
            self.engine.split_elements([ref], 4.0, retain_side="middle")


if __name__ == "__main__":
    unittest.main()
