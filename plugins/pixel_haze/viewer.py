"""
Interactive Pygame Viewer for the Pixel Grid

Acts as the frame driver: owns the parameter dict, rebuilds the grid on
window resize or geometry edits, and asks the engine for one frame per
display refresh. A side panel exposes every tunable parameter.

Controls:
  SPACE       Pause / Resume animation
  D           Toggle debug (activation) view
  R           Rebuild grid (resets activation)
  TAB         Toggle control panel
  H           Toggle HUD overlay
  S           Save screenshot
  1-9         Select preset
  Q / ESC     Quit
"""

import time

import numpy as np
import pygame

from .controls import ControlPanel, THEME
from .engine import PixelGridEngine
from .params import COLOR_KEYS, GEOMETRY_KEYS, get_slider_defs, needs_rebuild, validate_params
from .presets import PRESETS, PRESET_ORDER, preset_params
from .raster import composite, save_png

PANEL_WIDTH = 280
MIN_CANVAS = 64

# Sliders whose values the engine expects as integers
_INT_KEYS = ("cell_size", "gap")


class Viewer:

    def __init__(self, width=900, height=700, preset="haze", reduced_motion=False):
        """
        Args:
            width: Canvas width (panel is added to the right)
            height: Canvas height
            preset: Starting preset key
            reduced_motion: Freeze time at 0 (static pattern)
        """
        self.canvas_w = width
        self.canvas_h = height
        self.panel_visible = True
        self.show_hud = True
        self.running = True
        self.reduced_motion = reduced_motion
        self.fps_history = []

        self.preset_key = preset
        self.params = validate_params(preset_params(preset))
        self.engine = PixelGridEngine()
        self.engine.build(self.canvas_w, self.canvas_h, self.params)

        self.panel = None
        self.preset_buttons = None
        self._image = None
        self._scratch = None
        self._dirty = True

    @property
    def total_w(self):
        return self.canvas_w + (PANEL_WIDTH if self.panel_visible else 0)

    @property
    def motion_enabled(self):
        return not self.reduced_motion

    def _rebuild(self):
        self.engine.build(self.canvas_w, self.canvas_h, self.params)
        self._dirty = True

    def _apply_preset(self, key):
        self.preset_key = key
        old = self.params
        self.params = validate_params(preset_params(key))
        if needs_rebuild(old, self.params):
            self._rebuild()
        else:
            self.engine.refresh_palette(self.params)
            self._dirty = True
        if self.panel:
            self.panel.sync(self.params)
            if self.preset_buttons and key in PRESET_ORDER:
                self.preset_buttons.select(PRESET_ORDER.index(key))

    def _on_param_change(self, key, val):
        if key in _INT_KEYS:
            val = int(val)
        new = dict(self.params)
        new[key] = val
        try:
            validate_params(new)
        except ValueError as e:
            print(f"[PG] Ignoring {key}={val}: {e}")
            self.panel.sync(self.params)
            return
        old, self.params = self.params, new
        if key in GEOMETRY_KEYS and needs_rebuild(old, new):
            self._rebuild()
        elif key in COLOR_KEYS:
            self.engine.refresh_palette(new)
        self._dirty = True

    def _toggle(self, key):
        self.params = dict(self.params)
        self.params[key] = not self.params[key]
        self._dirty = True
        self._sync_toggles()

    def _sync_toggles(self):
        self._anim_button.active = self.params["enable_animation"]
        self._debug_button.active = self.params["debug_view"]

    def _on_preset_select(self, idx, name):
        if idx < len(PRESET_ORDER):
            self._apply_preset(PRESET_ORDER[idx])

    def _build_panel(self):
        panel = ControlPanel(self.canvas_w, 0, PANEL_WIDTH, self.canvas_h)

        panel.add_section("PRESETS")
        names = [PRESETS[k]["name"] for k in PRESET_ORDER]
        selected = PRESET_ORDER.index(self.preset_key) if self.preset_key in PRESET_ORDER else 0
        self.preset_buttons = panel.add_button_row(names, selected=selected,
                                                   on_select=self._on_preset_select)

        panel.add_sliders(get_slider_defs(), self.params, self._on_param_change)

        panel.add_section("TOGGLES")
        self._anim_button = panel.add_button(
            "Animate  [SPACE]", on_click=lambda: self._toggle("enable_animation"))
        self._debug_button = panel.add_button(
            "Debug mask  [D]", on_click=lambda: self._toggle("debug_view"))
        panel.add_button("Rebuild grid  [R]", on_click=self._rebuild)
        panel.add_button("Screenshot  [S]", on_click=self._save_screenshot)

        self.panel = panel
        self._sync_toggles()

    def _render_canvas(self):
        """Advance one frame if animating (or if something changed)."""
        animate = self.params["enable_animation"] and self.motion_enabled
        if animate or self._dirty or self._image is None:
            frame = self.engine.render_frame(pygame.time.get_ticks(), self.params,
                                             self.motion_enabled)
            if self._scratch is None or self._scratch.shape[:2] != (self.canvas_h, self.canvas_w):
                self._scratch = np.empty((self.canvas_h, self.canvas_w, 3), dtype=np.float32)
            self._image = composite(frame, self.canvas_w, self.canvas_h, out=self._scratch)
            self._dirty = False
        return pygame.surfarray.make_surface(self._image.swapaxes(0, 1).copy())

    def _draw_hud(self, screen, fps):
        if not self.show_hud:
            return
        stats = self.engine.stats
        preset = PRESETS.get(self.preset_key, {})
        line = (f"{preset.get('name', self.preset_key)}  |  "
                f"{stats['cols']}x{stats['rows']} cells  |  "
                f"Accents: {stats['accent_pct']:.1f}%  |  "
                f"Activation: {stats['mean_activation']:.2f}  |  FPS: {fps:.0f}")
        if not self.params["enable_animation"]:
            line = "[PAUSED]  " + line
        if self.reduced_motion:
            line = "[REDUCED MOTION]  " + line

        bg_surface = pygame.Surface((self.canvas_w, 24), pygame.SRCALPHA)
        bg_surface.fill((0, 0, 0, 90))
        screen.blit(bg_surface, (0, 0))
        screen.blit(self.hud_font.render(line, True, (250, 248, 245)), (10, 6))

    def _save_screenshot(self):
        if self._image is None:
            return
        path = save_png(self._image, f"pg_{self.preset_key}")
        print(f"Screenshot saved: {path}")

    def _on_resize(self, w, h):
        panel = PANEL_WIDTH if self.panel_visible else 0
        self.canvas_w = max(MIN_CANVAS, w - panel)
        self.canvas_h = max(MIN_CANVAS, h)
        self._rebuild()
        if self.panel:
            self.panel.x = self.canvas_w
            self.panel.height = self.canvas_h

    def run(self):
        """Main viewer loop."""
        pygame.init()

        screen = pygame.display.set_mode((self.total_w, self.canvas_h), pygame.RESIZABLE)
        pygame.display.set_caption("Pixel Haze")
        clock = pygame.time.Clock()

        self.hud_font = pygame.font.SysFont("menlo", 13)
        self.panel_font = pygame.font.SysFont("menlo", 12)

        self._build_panel()

        while self.running:
            frame_start = time.time()

            for event in pygame.event.get():
                if event.type == pygame.QUIT:
                    self.running = False
                    continue

                if event.type == pygame.VIDEORESIZE:
                    self._on_resize(event.w, event.h)
                    continue

                if event.type == pygame.KEYDOWN:
                    screen = self._handle_keydown(event, screen)
                    continue

                if self.panel_visible and self.panel:
                    if self.panel.handle_event(event):
                        continue

            screen.fill(THEME["bg"])
            screen.blit(self._render_canvas(), (0, 0))

            self.fps_history.append(time.time() - frame_start)
            if len(self.fps_history) > 30:
                self.fps_history.pop(0)
            avg_fps = 1.0 / max(np.mean(self.fps_history), 0.001)
            self._draw_hud(screen, avg_fps)

            if self.panel_visible and self.panel:
                self.panel.x = self.canvas_w
                self.panel.height = self.canvas_h
                self.panel.draw(screen, self.panel_font)

            pygame.display.flip()
            clock.tick(60)

        pygame.quit()

    def _handle_keydown(self, event, screen):
        key = event.key

        if key in (pygame.K_q, pygame.K_ESCAPE):
            self.running = False

        elif key == pygame.K_SPACE:
            self._toggle("enable_animation")

        elif key == pygame.K_d:
            self._toggle("debug_view")

        elif key == pygame.K_r:
            self._rebuild()

        elif key == pygame.K_h:
            self.show_hud = not self.show_hud

        elif key == pygame.K_TAB:
            self.panel_visible = not self.panel_visible
            screen = pygame.display.set_mode((self.total_w, self.canvas_h), pygame.RESIZABLE)

        elif key == pygame.K_s:
            self._save_screenshot()

        elif pygame.K_1 <= key <= pygame.K_9:
            idx = key - pygame.K_1
            if idx < len(PRESET_ORDER):
                self._apply_preset(PRESET_ORDER[idx])

        return screen
