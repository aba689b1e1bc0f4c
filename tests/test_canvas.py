from __future__ import annotations

import math
import unittest

from mafs_view import CanvasConfig, MathCanvas, ViewBox, ViewConfigError, ZoomLimits, canvas


class MathCanvasTests(unittest.TestCase):
    def test_initial_viewport(self) -> None:
        c = MathCanvas()
        self.assertIsNotNone(c.viewport)
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-3.5, 3.5, -3.5, 3.5))
        self.assertEqual(c.size, (500.0, 500.0))
        self.assertEqual(c.screen_to_math((250.0, 250.0)), (0.0, 0.0))

    def test_pan_gesture_is_relative_to_gesture_start(self) -> None:
        c = MathCanvas()
        c.on_gesture_start()
        self.assertTrue(c.gesture_active)
        c.on_gesture_update((260.0, 250.0), 1.0, (10.0, 0.0))
        assert c.viewport is not None
        self.assertAlmostEqual(c.viewport.x_min, -3.64)
        c.on_gesture_update((270.0, 250.0), 1.0, (20.0, 0.0))
        self.assertAlmostEqual(c.viewport.x_min, -3.78)
        self.assertAlmostEqual(c.viewport.y_min, -3.5)
        c.on_gesture_end()
        self.assertFalse(c.gesture_active)

    def test_updates_without_active_gesture_are_ignored(self) -> None:
        c = MathCanvas()
        c.on_gesture_update((260.0, 250.0), 1.0, (10.0, 0.0))
        assert c.viewport is not None
        self.assertEqual(c.viewport.x_min, -3.5)

    def test_pan_disabled(self) -> None:
        c = MathCanvas(config=CanvasConfig(pan=False))
        c.on_gesture_start()
        c.on_gesture_update((300.0, 300.0), 1.0, (50.0, 50.0))
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-3.5, 3.5, -3.5, 3.5))

    def test_pinch_zoom_then_pan(self) -> None:
        c = MathCanvas(config=CanvasConfig(zoom=ZoomLimits(0.5, 5.0)))
        c.on_gesture_start()
        c.on_gesture_update((250.0, 250.0), 2.0, (0.0, 0.0))
        c.on_gesture_end()
        assert c.viewport is not None
        self.assertAlmostEqual(c.viewport.x_min, -1.75)
        self.assertAlmostEqual(c.viewport.x_max, 1.75)
        self.assertAlmostEqual(c.camera.cumulative_zoom, 2.0)

        # A 10 px drag at 2x moves the visible rectangle by 10 px of the zoomed span.
        c.on_gesture_start()
        c.on_gesture_update((260.0, 250.0), 1.0, (10.0, 0.0))
        self.assertAlmostEqual(c.viewport.x_min, -1.82)
        self.assertAlmostEqual(c.viewport.x_max, 1.68)

    def test_drag_moves_content_with_pointer_at_any_zoom(self) -> None:
        c = MathCanvas(config=CanvasConfig(zoom=True))
        for zoom in (1.0, 2.0):
            if zoom != 1.0:
                c.on_gesture_start()
                c.on_gesture_update((250.0, 250.0), zoom, (0.0, 0.0))
                c.on_gesture_end()
            self.assertAlmostEqual(c.camera.cumulative_zoom, zoom)
            anchor = c.screen_to_math((300.0, 200.0))
            assert anchor is not None
            c.on_gesture_start()
            c.on_gesture_update((310.0, 206.0), 1.0, (10.0, 6.0))
            c.on_gesture_end()
            moved = c.math_to_screen(anchor)
            assert moved is not None
            self.assertAlmostEqual(moved[0], 310.0, places=3, msg=f"zoom {zoom}")
            self.assertAlmostEqual(moved[1], 206.0, places=3, msg=f"zoom {zoom}")

    def test_zoom_ignored_when_disabled(self) -> None:
        c = MathCanvas()
        c.on_gesture_start()
        c.on_gesture_update((250.0, 250.0), 2.0, (0.0, 0.0))
        c.on_scroll(300.0, (250.0, 250.0))
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-3.5, 3.5, -3.5, 3.5))

    def test_scroll_zooms_about_pointer(self) -> None:
        c = MathCanvas(config=CanvasConfig(zoom=True))
        c.on_scroll(300.0, (250.0, 250.0))
        expected = 2.0 / (1.0 + math.exp(-1.0))
        self.assertAlmostEqual(c.camera.cumulative_zoom, expected)
        assert c.viewport is not None
        self.assertAlmostEqual(c.viewport.x_max, 3.5 / expected)

        before = c.screen_to_math((100.0, 50.0))
        c.on_scroll(-120.0, (100.0, 50.0))
        after = c.screen_to_math((100.0, 50.0))
        assert before is not None and after is not None
        self.assertAlmostEqual(before[0], after[0], places=6)
        self.assertAlmostEqual(before[1], after[1], places=6)

    def test_resize_to_empty_notifies_none(self) -> None:
        c = MathCanvas()
        seen = []
        unsubscribe = c.subscribe(seen.append)
        with self.assertLogs("mafs_view.canvas", level="WARNING"):
            c.resize(0, 300)
        self.assertIsNone(c.viewport)
        self.assertEqual(seen, [None])
        self.assertIsNone(c.screen_to_math((1.0, 1.0)))
        self.assertIsNone(c.math_to_screen((1.0, 1.0)))
        self.assertIsNone(c.transform_context())

        c.resize(800, 400)
        self.assertEqual(len(seen), 2)
        assert seen[1] is not None
        self.assertEqual((seen[1].x_min, seen[1].x_max), (-7.0, 7.0))

        c.resize(800, 400)
        self.assertEqual(len(seen), 2)
        unsubscribe()
        c.resize(500, 500)
        self.assertEqual(len(seen), 2)

    def test_gestures_on_empty_canvas_do_nothing(self) -> None:
        c = MathCanvas(width=0, height=0, config=CanvasConfig(zoom=True))
        c.on_gesture_start()
        c.on_gesture_update((1.0, 1.0), 2.0, (5.0, 5.0))
        c.on_scroll(100.0, (1.0, 1.0))
        self.assertIsNone(c.viewport)
        self.assertEqual(c.camera.cumulative_zoom, 1.0)

    def test_tap_reports_math_point(self) -> None:
        taps = []
        c = MathCanvas(on_tap=taps.append)
        self.assertEqual(c.on_tap((250.0, 250.0)), (0.0, 0.0))
        self.assertEqual(taps, [(0.0, 0.0)])

    def test_set_config_replaces_camera_when_limits_change(self) -> None:
        c = MathCanvas(config=CanvasConfig(zoom=True))
        c.on_scroll(300.0, (250.0, 250.0))
        old_camera = c.camera
        c.set_config(CanvasConfig(zoom=ZoomLimits(0.25, 8.0)))
        self.assertIsNot(c.camera, old_camera)
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-3.5, 3.5, -3.5, 3.5))

        same_camera = c.camera
        c.set_config(CanvasConfig(zoom=ZoomLimits(0.25, 8.0), pan=False))
        self.assertIs(c.camera, same_camera)

    def test_padding_override_and_view_box_change(self) -> None:
        c = MathCanvas(config=CanvasConfig(padding=1.0))
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-4.0, 4.0, -4.0, 4.0))

        seen = []
        c.subscribe(seen.append)
        c.set_view_box(ViewBox(x=(0.0, 2.0), y=(0.0, 2.0)))
        self.assertEqual(len(seen), 1)
        self.assertEqual(c.viewport.bounds(), (-1.0, 3.0, -1.0, 3.0))


class CanvasFactoryTests(unittest.TestCase):
    def test_missing_width_follows_view_box_aspect(self) -> None:
        c = canvas(ViewBox(x=(-5.0, 5.0), y=(-2.5, 2.5), padding=0.0), height=300)
        self.assertEqual(c.size, (600.0, 300.0))
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-5.0, 5.0, -2.5, 2.5))

    def test_missing_height_and_defaults(self) -> None:
        c = canvas(ViewBox(x=(-5.0, 5.0), y=(-2.5, 2.5), padding=0.0), width=400)
        self.assertEqual(c.size, (400.0, 200.0))
        self.assertEqual(canvas().size, (500.0, 500.0))

    def test_options_flow_into_config(self) -> None:
        c = canvas(width=200, height=100, pan=False, zoom=True, aspect_policy="stretch")
        self.assertFalse(c.config.pan)
        self.assertTrue(c.config.zoom_enabled)
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-3.5, 3.5, -3.5, 3.5))
        with self.assertRaises(ValueError):
            canvas(height=0)

    def test_zero_span_box_needs_both_dimensions(self) -> None:
        flat_y = ViewBox(x=(-1.0, 1.0), y=(2.0, 2.0), padding=0.0)
        flat_x = ViewBox(x=(3.0, 3.0), y=(-1.0, 1.0), padding=0.0)
        with self.assertRaises(ViewConfigError):
            canvas(flat_y, height=300)
        with self.assertRaises(ViewConfigError):
            canvas(flat_x, width=300)
        with self.assertRaises(ViewConfigError):
            canvas(flat_y)

        c = canvas(flat_y, width=200, height=100)
        assert c.viewport is not None
        self.assertEqual(c.viewport.bounds(), (-1.0, 1.0, 1.5, 2.5))
        self.assertIsNotNone(canvas(flat_y, padding=0.5, height=300).viewport)


if __name__ == "__main__":
    unittest.main()
