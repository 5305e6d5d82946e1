"""
Tuning panel widgets for the pixel grid viewer

Minimal, light-themed widgets drawn directly with pygame. The panel
scrolls with the mouse wheel since the full parameter set is taller
than most windows.
"""

import pygame


# Theme colors (warm paper tones to sit next to the default palette)
THEME = {
    "bg": (246, 242, 239),
    "panel": (236, 232, 228),
    "track": (210, 205, 200),
    "track_fill": (196, 150, 150),
    "handle": (120, 115, 110),
    "handle_active": (60, 55, 50),
    "text": (90, 85, 80),
    "text_bright": (40, 36, 32),
    "text_dim": (150, 145, 140),
    "button": (222, 217, 212),
    "button_hover": (210, 204, 198),
    "button_active": (196, 150, 150),
    "divider": (214, 209, 204),
}


class Slider:
    """Horizontal slider bound to one parameter key."""

    def __init__(self, x, y, width, key, label, min_val, max_val, value,
                 fmt=".3f", step=None, on_change=None):
        self.x = x
        self.y = y
        self.width = width
        self.height = 36
        self.key = key
        self.label = label
        self.min_val = min_val
        self.max_val = max_val
        self.value = value
        self.fmt = fmt
        self.step = step
        self.on_change = on_change
        self.dragging = False
        self.hovered = False

        self.track_h = 4
        self.handle_r = 6
        self.track_x = self.x + 8
        self.track_w = self.width - 16

    @property
    def track_y(self):
        return self.y + 22

    def _val_to_x(self, val):
        frac = (val - self.min_val) / (self.max_val - self.min_val)
        return self.track_x + max(0.0, min(1.0, frac)) * self.track_w

    def _x_to_val(self, px):
        frac = (px - self.track_x) / self.track_w
        frac = max(0, min(1, frac))
        val = self.min_val + frac * (self.max_val - self.min_val)
        if self.step:
            val = round(val / self.step) * self.step
        return val

    def _set_from_x(self, px):
        val = self._x_to_val(px)
        if val != self.value:
            self.value = val
            if self.on_change:
                self.on_change(self.key, val)

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            mx, my = event.pos
            if (self.track_x - 4 <= mx <= self.track_x + self.track_w + 4 and
                    self.track_y - 10 <= my <= self.track_y + 10):
                self.dragging = True
                self._set_from_x(mx)
                return True

        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.dragging = False

        elif event.type == pygame.MOUSEMOTION:
            mx, my = event.pos
            hx = self._val_to_x(self.value)
            self.hovered = (abs(mx - hx) < 10 and abs(my - self.track_y) < 10)
            if self.dragging:
                self._set_from_x(mx)
                return True

        return False

    def set_value(self, val):
        self.value = max(self.min_val, min(self.max_val, val))

    def draw(self, surface, font):
        label_surf = font.render(self.label, True, THEME["text"])
        surface.blit(label_surf, (self.x + 8, self.y + 2))

        val_surf = font.render(f"{self.value:{self.fmt}}", True, THEME["text_bright"])
        surface.blit(val_surf, (self.x + self.width - val_surf.get_width() - 8, self.y + 2))

        track_rect = pygame.Rect(self.track_x, self.track_y - self.track_h // 2,
                                 self.track_w, self.track_h)
        pygame.draw.rect(surface, THEME["track"], track_rect, border_radius=2)

        hx = self._val_to_x(self.value)
        fill_rect = pygame.Rect(self.track_x, self.track_y - self.track_h // 2,
                                hx - self.track_x, self.track_h)
        pygame.draw.rect(surface, THEME["track_fill"], fill_rect, border_radius=2)

        color = THEME["handle_active"] if (self.dragging or self.hovered) else THEME["handle"]
        pygame.draw.circle(surface, color, (int(hx), self.track_y), self.handle_r)


class Button:
    """Clickable button. Toggle buttons show their on state as active."""

    def __init__(self, x, y, width, height, label, on_click=None, active=False):
        self.rect = pygame.Rect(x, y, width, height)
        self.label = label
        self.on_click = on_click
        self.active = active
        self.hovered = False

    @property
    def height(self):
        return self.rect.height

    def handle_event(self, event):
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                if self.on_click:
                    self.on_click()
                return True
        elif event.type == pygame.MOUSEMOTION:
            self.hovered = self.rect.collidepoint(event.pos)
        return False

    def draw(self, surface, font):
        if self.active:
            color = THEME["button_active"]
        elif self.hovered:
            color = THEME["button_hover"]
        else:
            color = THEME["button"]
        pygame.draw.rect(surface, color, self.rect, border_radius=4)

        label_surf = font.render(self.label, True, THEME["text_bright"])
        lx = self.rect.x + (self.rect.width - label_surf.get_width()) // 2
        ly = self.rect.y + (self.rect.height - label_surf.get_height()) // 2
        surface.blit(label_surf, (lx, ly))


class ButtonRow:
    """Wrapping row of mutually exclusive buttons (preset picker)."""

    def __init__(self, x, y, width, labels, selected=0, on_select=None, btn_height=24):
        self.labels = labels
        self.selected = selected
        self.on_select = on_select
        self.buttons = []

        padding = 4
        bx, by = x, y
        for label in labels:
            bw = max(len(label) * 8 + 16, 50)
            if bx + bw > x + width and bx > x:
                bx = x
                by += btn_height + padding
            self.buttons.append(Button(bx, by, bw, btn_height, label))
            bx += bw + padding

        self.height = by - y + btn_height
        self.select(selected)

    def select(self, idx):
        self.selected = idx
        for i, btn in enumerate(self.buttons):
            btn.active = (i == idx)

    def handle_event(self, event):
        for i, btn in enumerate(self.buttons):
            if btn.handle_event(event):
                self.select(i)
                if self.on_select:
                    self.on_select(i, self.labels[i])
                return True
        return False

    def draw(self, surface, font):
        for btn in self.buttons:
            btn.draw(surface, font)


class SectionHeader:
    """Section divider with title."""

    def __init__(self, x, y, width, title):
        self.x = x
        self.y = y
        self.width = width
        self.title = title
        self.height = 24

    def draw(self, surface, font):
        pygame.draw.line(surface, THEME["divider"],
                         (self.x + 8, self.y + 8),
                         (self.x + self.width - 8, self.y + 8))
        title_surf = font.render(self.title, True, THEME["text_dim"])
        surface.blit(title_surf, (self.x + 8, self.y + 12))


class ControlPanel:
    """Scrollable side panel holding the tuning widgets."""

    def __init__(self, x, y, width, height):
        self.x = x
        self.y = y
        self.width = width
        self.height = height
        self.widgets = []
        self.sliders = {}
        self.scroll = 0
        self._cursor_y = 8

    @property
    def content_height(self):
        return self._cursor_y + 8

    def add_section(self, title):
        header = SectionHeader(0, self._cursor_y, self.width, title)
        self.widgets.append(header)
        self._cursor_y += header.height + 4

    def add_slider(self, key, label, min_val, max_val, value, fmt=".3f",
                   step=None, on_change=None):
        slider = Slider(0, self._cursor_y, self.width, key, label,
                        min_val, max_val, value, fmt, step, on_change)
        self.widgets.append(slider)
        self.sliders[key] = slider
        self._cursor_y += slider.height + 6
        return slider

    def add_sliders(self, slider_defs, values, on_change):
        """Add sliders grouped by their "section" field, in order."""
        section = None
        for sdef in slider_defs:
            if sdef["section"] != section:
                section = sdef["section"]
                self.add_section(section)
            self.add_slider(sdef["key"], sdef["label"], sdef["min"], sdef["max"],
                            values.get(sdef["key"], sdef["default"]),
                            fmt=sdef.get("fmt", ".3f"), step=sdef.get("step"),
                            on_change=on_change)

    def add_button_row(self, labels, selected=0, on_select=None):
        row = ButtonRow(8, self._cursor_y, self.width - 16, labels, selected, on_select)
        self.widgets.append(row)
        self._cursor_y += row.height + 8
        return row

    def add_button(self, label, on_click=None, active=False):
        btn = Button(8, self._cursor_y, self.width - 16, 26, label, on_click, active)
        self.widgets.append(btn)
        self._cursor_y += 32
        return btn

    def sync(self, values):
        """Move every slider to the value in a parameter dict."""
        for key, slider in self.sliders.items():
            if key in values:
                slider.set_value(values[key])

    def handle_event(self, event):
        """Process events in panel-local (scrolled) coordinates."""
        if event.type == pygame.MOUSEWHEEL:
            mx, _ = pygame.mouse.get_pos()
            if mx < self.x:
                return False
            max_scroll = max(0, self.content_height - self.height)
            self.scroll = max(0, min(max_scroll, self.scroll - event.y * 24))
            return True

        if hasattr(event, "pos"):
            local_pos = (event.pos[0] - self.x, event.pos[1] - self.y + self.scroll)
            if not (0 <= event.pos[0] - self.x <= self.width and
                    0 <= event.pos[1] - self.y <= self.height):
                # Release drags that end outside the panel
                if event.type == pygame.MOUSEBUTTONUP:
                    for widget in self.widgets:
                        if hasattr(widget, "dragging"):
                            widget.dragging = False
                return False
            adjusted = pygame.event.Event(event.type, {
                **{k: v for k, v in event.__dict__.items() if k != "pos"},
                "pos": local_pos,
            })
        else:
            adjusted = event

        for widget in self.widgets:
            if hasattr(widget, "handle_event") and widget.handle_event(adjusted):
                return True
        return False

    def draw(self, target_surface, font):
        surface = pygame.Surface((self.width, max(self.content_height, self.height)))
        surface.fill(THEME["panel"])
        for widget in self.widgets:
            widget.draw(surface, font)

        target_surface.blit(surface, (self.x, self.y),
                            area=pygame.Rect(0, self.scroll, self.width, self.height))
        pygame.draw.line(target_surface, THEME["divider"],
                         (self.x, self.y), (self.x, self.y + self.height))
