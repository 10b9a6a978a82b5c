"""A 2D camera mapping between screen and world coordinates."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from tilearena.geometry import Vec2, clamp

MIN_ZOOM = 0.125
MAX_ZOOM = 64.0
ZOOM_STEP = 0.2
"""Change of log-zoom for one unit of mouse-wheel movement."""


@dataclass
class Camera2D:
    """Camera looking at ``target``, drawn at ``offset`` on screen."""

    offset: Vec2 = field(default_factory=Vec2)
    target: Vec2 = field(default_factory=Vec2)
    rotation: float = 0.0
    zoom: float = 1.0

    def world_to_screen(self, point: Vec2) -> Vec2:
        """Project a world point onto the screen."""
        rel = point - self.target
        angle = math.radians(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        rotated = Vec2(cos_a * rel.x - sin_a * rel.y, sin_a * rel.x + cos_a * rel.y)
        return rotated * self.zoom + self.offset

    def screen_to_world(self, point: Vec2) -> Vec2:
        """Find the world point shown at a screen position."""
        rel = (point - self.offset) * (1.0 / self.zoom)
        angle = math.radians(self.rotation)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        unrotated = Vec2(cos_a * rel.x + sin_a * rel.y, -sin_a * rel.x + cos_a * rel.y)
        return unrotated + self.target

    def zoom_at(self, mouse: Vec2, wheel: float) -> None:
        """Zoom by wheel movement, keeping the world point under the mouse fixed."""
        if wheel == 0:
            return
        anchor = self.screen_to_world(mouse)
        self.offset = mouse
        self.target = anchor
        self.zoom = clamp(
            math.exp(math.log(self.zoom) + ZOOM_STEP * wheel), MIN_ZOOM, MAX_ZOOM
        )

    def drag(self, delta: Vec2) -> None:
        """Pan the view by a mouse movement given in screen units."""
        self.target = self.target + delta * (-1.0 / self.zoom)

    def follow(self, pos: Vec2, width: float, height: float) -> None:
        """Centre the camera on a box at normal zoom."""
        self.zoom = 1.0
        self.target = Vec2(pos.x + width / 2, pos.y + height / 2)