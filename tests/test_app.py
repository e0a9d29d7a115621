# tests/test_app.py
"""
Host integration tests for TreeCanvasApp, run headless.

This suite focuses on:
- Frame contract (advance, then read the transform once)
- Routing of wheel / drag / clicks between chrome and camera
- Commands (buttons and keys) and window resize
"""
from __future__ import annotations

import math
import os
import unittest

# --- Headless-friendly pygame init (no real window needed) -------------------
os.environ.setdefault("SDL_VIDEODRIVER", "dummy")
os.environ.setdefault("SDL_AUDIODRIVER", "dummy")

import pygame  # noqa: E402

from treecanvas.core.app import TreeCanvasApp, canvas_rect_for  # noqa: E402
from treecanvas.utils import settings  # noqa: E402
from treecanvas.utils.camera_types import ViewTransform  # noqa: E402
from treecanvas.world.placeholder import generate_placeholder_nodes  # noqa: E402

W, H = 480, 360


class TestTreeCanvasApp(unittest.TestCase):
    """Test suite for the render/input host."""

    @classmethod
    def setUpClass(cls):
        pygame.init()

    def setUp(self):
        pygame.event.clear()
        self.app = TreeCanvasApp(W, H, graph=generate_placeholder_nodes(30, seed=3))
        self.cam = self.app.camera

    def tearDown(self):
        pygame.event.clear()

    # --------------------------------------------------------------------- #
    # Helpers
    # --------------------------------------------------------------------- #

    def canvas_center(self):
        r = self.app.canvas_rect
        return r.centerx, r.top + r.height // 2

    def send(self, etype, **attrs):
        self.app.handle_event(pygame.event.Event(etype, **attrs))

    def button(self, action):
        return next(b for b in self.app.controls.buttons if b.action == action)

    # --------------------------------------------------------------------- #
    # Layout & frame contract
    # --------------------------------------------------------------------- #

    def test_canvas_sits_below_top_bar(self):
        self.assertEqual(self.app.canvas_rect, pygame.Rect(0, settings.TOP_BAR_HEIGHT, W, H - settings.TOP_BAR_HEIGHT))
        self.assertEqual((self.cam.width, self.cam.height), (W, H - settings.TOP_BAR_HEIGHT))

    def test_canvas_rect_collapses_on_tiny_windows(self):
        self.assertEqual(canvas_rect_for(100, 20).height, 0)

    def test_frame_returns_rendered_transform(self):
        self.cam.zoom_in_center()
        t = self.app.frame()
        self.assertEqual(t, self.cam.current_transform())
        self.assertAlmostEqual(t.zoom, 1.0 + 0.5 * 0.15)
        self.assertEqual(self.app.frame_count, 1)

    def test_project_matches_camera(self):
        self.cam.double_click_zoom(50, 60)
        for _ in range(5):
            self.app.frame()
        pts = self.app.project(self.cam.current_transform(), self.app.graph.positions[:4])
        for (wx, wy), (sx, sy) in zip(self.app.graph.positions[:4].tolist(), pts.tolist()):
            ex, ey = self.cam.world_to_screen(wx, wy)
            self.assertAlmostEqual(sx, ex, places=9)
            self.assertAlmostEqual(sy, ey, places=9)

    # --------------------------------------------------------------------- #
    # Input routing
    # --------------------------------------------------------------------- #

    def test_wheel_over_canvas_zooms(self):
        cx, cy = self.canvas_center()
        self.send(pygame.MOUSEWHEEL, x=0, y=1, pos=(cx, cy))
        self.assertAlmostEqual(self.cam.state.target_zoom, 1.3)
        self.assertAlmostEqual(self.cam.state.target_pan_x, 0.0)

    def test_hovering_a_button_suppresses_wheel(self):
        pos = self.button("zoom_in").rect.center
        self.send(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(0, 0, 0))
        self.assertTrue(self.app.input_router.pointer_over_ui)
        self.send(pygame.MOUSEWHEEL, x=0, y=1, pos=pos)
        self.assertEqual(self.cam.state.target_zoom, 1.0)

        # leaving the button re-enables the canvas
        cx, cy = self.canvas_center()
        self.send(pygame.MOUSEMOTION, pos=(cx, cy + 40), rel=(0, 0), buttons=(0, 0, 0))
        self.assertFalse(self.app.input_router.pointer_over_ui)

    def test_drag_end_fires_over_chrome(self):
        cx, cy = self.canvas_center()
        self.send(pygame.MOUSEBUTTONDOWN, button=1, pos=(cx, cy))
        self.send(pygame.MOUSEMOTION, pos=(cx + 30, cy), rel=(30, 0), buttons=(1, 0, 0))
        self.assertEqual(self.cam.state.target_pan_x, 30.0)

        self.send(pygame.MOUSEMOTION, pos=(cx, 10), rel=(0, 0), buttons=(1, 0, 0))  # into the top bar
        self.assertTrue(self.app.input_router.pointer_over_ui)
        self.assertEqual(self.cam.state.target_pan_y, 0.0)

        self.send(pygame.MOUSEBUTTONUP, button=1, pos=(cx, 10))
        self.assertFalse(self.cam.is_dragging)

    def test_double_click_on_canvas(self):
        cx, cy = self.canvas_center()
        for etype in (pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP, pygame.MOUSEBUTTONDOWN, pygame.MOUSEBUTTONUP):
            self.send(etype, button=1, pos=(cx, cy))
        self.assertEqual(self.cam.state.target_zoom, 2.0)
        self.assertFalse(self.cam.is_dragging)

    # --------------------------------------------------------------------- #
    # Commands
    # --------------------------------------------------------------------- #

    def test_zoom_buttons(self):
        self.send(pygame.MOUSEBUTTONDOWN, button=1, pos=self.button("zoom_in").rect.center)
        self.assertAlmostEqual(self.cam.state.target_zoom, 1.5)
        self.assertFalse(self.cam.is_dragging)
        self.send(pygame.MOUSEBUTTONDOWN, button=1, pos=self.button("zoom_out").rect.center)
        self.assertAlmostEqual(self.cam.state.target_zoom, 1.0)

    def test_fps_toggle_button(self):
        self.assertFalse(self.app.fps_overlay.enabled)
        self.send(pygame.MOUSEBUTTONDOWN, button=1, pos=self.button("toggle_fps").rect.center)
        self.assertTrue(self.app.fps_overlay.enabled)
        self.assertEqual(self.button("toggle_fps").label, "FPS ON")
        self.app.frame()  # overlay draws without error
        self.app.run_command("toggle_fps")
        self.assertEqual(self.button("toggle_fps").label, "FPS OFF")

    def test_reset_key_and_button(self):
        self.cam.double_click_zoom(10, 10)
        self.send(pygame.KEYDOWN, key=pygame.K_r, mod=0, unicode="r", scancode=0)
        self.assertEqual(self.cam.state.target_zoom, 1.0)
        self.assertEqual((self.cam.state.target_pan_x, self.cam.state.target_pan_y), (0.0, 0.0))

        self.cam.zoom_in_center()
        self.send(pygame.MOUSEBUTTONDOWN, button=1, pos=self.button("reset_view").rect.center)
        self.assertEqual(self.cam.state.target_zoom, 1.0)

    def test_keyboard_zoom_steps_and_nudge(self):
        self.send(pygame.KEYDOWN, key=pygame.K_EQUALS, mod=0, unicode="=", scancode=0)
        self.assertAlmostEqual(self.cam.state.target_zoom, 1.2)
        self.send(pygame.KEYDOWN, key=pygame.K_MINUS, mod=0, unicode="-", scancode=0)
        self.assertAlmostEqual(self.cam.state.target_zoom, 1.0)

        self.send(pygame.KEYDOWN, key=pygame.K_LEFT, mod=0, unicode="", scancode=0)
        self.assertEqual(self.cam.state.velocity_x, settings.NUDGE_SPEED)
        self.app.frame()
        self.assertEqual(self.cam.state.target_pan_x, settings.NUDGE_SPEED)

    def test_unknown_command_is_logged(self):
        with self.assertLogs("treecanvas.core.app", level="WARNING"):
            self.app.run_command("launch_rockets")

    def test_resize_event_updates_camera(self):
        self.send(pygame.VIDEORESIZE, w=640, h=480, size=(640, 480))
        self.assertEqual((self.cam.width, self.cam.height), (640, 480 - settings.TOP_BAR_HEIGHT))
        self.assertEqual(self.app.input_router.canvas_rect, self.app.canvas_rect)
        self.assertEqual(self.button("reset_view").rect.right, 640 - settings.CONTROL_MARGIN)

    def test_non_finite_transform_skips_world_drawing(self):
        canvas = self.app.screen.subsurface(self.app.canvas_rect)
        with self.assertLogs("treecanvas.core.app", level="WARNING"):
            self.app.draw_world(canvas, ViewTransform(math.nan, 0.0, 0.0))

    # --------------------------------------------------------------------- #
    # Main loop
    # --------------------------------------------------------------------- #

    def test_run_stops_after_max_frames(self):
        self.assertEqual(self.app.run(max_frames=3), 0)
        self.assertEqual(self.app.frame_count, 3)

    def test_quit_event_stops_loop(self):
        pygame.event.post(pygame.event.Event(pygame.QUIT))
        self.assertEqual(self.app.run(max_frames=50), 0)
        self.assertEqual(self.app.frame_count, 0)

    def test_escape_quits(self):
        pygame.event.post(pygame.event.Event(pygame.KEYDOWN, key=pygame.K_ESCAPE, mod=0, unicode="", scancode=0))
        self.assertEqual(self.app.run(max_frames=50), 0)
        self.assertEqual(self.app.frame_count, 0)


if __name__ == "__main__":
    unittest.main(verbosity=2)
