# treecanvas/world/placeholder.py
"""
Placeholder world content until real tree data is wired in.

- A seeded random tree of nodes (numpy), laid out in world space around the origin
- A bouncing, hue-cycling marker so motion and frame pacing are visible
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

import numpy as np
import pygame

from treecanvas.utils import settings


@dataclass
class PlaceholderGraph:
    """
    positions: (N, 2) float array of world coordinates; row 0 is the root.
    parents:   (N,) int array; parents[0] == -1, parents[i] < i otherwise.
    hues:      (N,) float array in [0, 360).
    """
    positions: np.ndarray
    parents: np.ndarray
    hues: np.ndarray

    def __len__(self) -> int:
        return int(self.positions.shape[0])

    def edges(self) -> np.ndarray:
        """(N-1, 2) array of (parent, child) index pairs."""
        children = np.arange(1, len(self))
        return np.column_stack((self.parents[1:], children))


def generate_placeholder_nodes(
    count: int = settings.PLACEHOLDER_NODE_COUNT,
    seed: int = settings.PLACEHOLDER_SEED,
    spread: float = settings.PLACEHOLDER_SPREAD,
) -> PlaceholderGraph:
    """
    Build a random tree: each new node hangs off an earlier one, offset by a
    random step that shrinks with depth so the tree fans out from the root.
    """
    if count < 0:
        raise ValueError(f"count must be >= 0, got {count}")
    rng = np.random.default_rng(seed)
    positions = np.zeros((count, 2), dtype=float)
    parents = np.full(count, -1, dtype=int)
    depth = np.zeros(count, dtype=int)

    for i in range(1, count):
        parent = int(rng.integers(0, i))
        parents[i] = parent
        depth[i] = depth[parent] + 1
        angle = rng.uniform(0.0, 2.0 * np.pi)
        step = spread / (2.0 + depth[i]) * rng.uniform(0.6, 1.0)
        positions[i] = positions[parent] + step * np.array((np.cos(angle), np.sin(angle)))

    hues = (depth * 37.0) % 360.0
    return PlaceholderGraph(positions=positions, parents=parents, hues=hues)


class BouncingMarker:
    """Circle that bounces inside a world-space box and cycles its hue each frame."""

    def __init__(
        self,
        bounds: Tuple[float, float, float, float],
        *,
        radius: float = settings.MARKER_RADIUS,
        velocity: Tuple[float, float] = settings.MARKER_VELOCITY,
    ) -> None:
        self.left, self.top, self.right, self.bottom = bounds
        self.radius = float(radius)
        self.position = pygame.Vector2((self.left + self.right) / 2, (self.top + self.bottom) / 2)
        self.velocity = pygame.Vector2(velocity)
        self.frame = 0

    def set_bounds(self, bounds: Tuple[float, float, float, float]) -> None:
        self.left, self.top, self.right, self.bottom = bounds
        self.position.x = _constrain(self.position.x, self.left + self.radius, self.right - self.radius)
        self.position.y = _constrain(self.position.y, self.top + self.radius, self.bottom - self.radius)

    @property
    def hue(self) -> int:
        return (self.frame * settings.MARKER_HUE_STEP) % 360

    def color(self) -> pygame.Color:
        c = pygame.Color(0, 0, 0)
        c.hsva = (self.hue, 70, 90, 100)
        return c

    def update(self) -> None:
        self.frame += 1
        self.position += self.velocity
        r = self.radius

        if self.position.x - r <= self.left or self.position.x + r >= self.right:
            self.velocity.x *= -1
            self.position.x = _constrain(self.position.x, self.left + r, self.right - r)
        if self.position.y - r <= self.top or self.position.y + r >= self.bottom:
            self.velocity.y *= -1
            self.position.y = _constrain(self.position.y, self.top + r, self.bottom - r)


def _constrain(value: float, lo: float, hi: float) -> float:
    # Box smaller than the marker: pin to the middle.
    if lo > hi:
        return (lo + hi) / 2
    return max(lo, min(hi, value))
