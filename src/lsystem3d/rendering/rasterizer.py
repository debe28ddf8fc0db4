"""Screen-space line rasterization with a Z-less depth test.

A segment is walked in ``n + 1`` evenly spaced samples, ``n`` being the
larger of its pixel extents. Each sample rounds to a pixel (or a disk of
pixels for thick lines), interpolates depth and color linearly, and wins the
pixel only if its depth is strictly smaller than the stored one.

Both strategies produce identical buffers: the vectorized one resolves
competing fragments by (depth, submission order), which is what sequential
strictly-less writes converge to.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from functools import cache

import numpy as np

from lsystem3d.utilities.env import RasterStrategy


@dataclass(frozen=True)
class SegmentBatch:
    """Projected segments ready for rasterization.

    ``start``/``end`` are ``(n, 3)`` arrays of screen x, screen y and NDC z;
    ``start_color``/``end_color`` are ``(n, 3)`` RGB arrays.
    """

    start: np.ndarray
    end: np.ndarray
    start_color: np.ndarray
    end_color: np.ndarray
    thickness: np.ndarray

    def __len__(self) -> int:
        return int(self.start.shape[0])


def disk_radius(thickness: float) -> int:
    return math.ceil(thickness / 2.0) if thickness > 1.0 else 0


@cache
def disk_offsets(radius: int) -> tuple[tuple[int, int], ...]:
    """Pixel offsets inside the inscribed circle of ``radius``, row by row."""

    return tuple(
        (dx, dy)
        for dy in range(-radius, radius + 1)
        for dx in range(-radius, radius + 1)
        if dx * dx + dy * dy <= radius * radius
    )


def pack_colors(colors: np.ndarray) -> np.ndarray:
    channels = (np.clip(colors, 0.0, 1.0) * 255.0).astype(np.uint32)
    return (channels[..., 0] << 16) | (channels[..., 1] << 8) | channels[..., 2]


def pack_color(color: tuple[float, float, float]) -> int:
    r, g, b = (int(min(max(channel, 0.0), 1.0) * 255.0) for channel in color)
    return (r << 16) | (g << 8) | b


def step_ranges(
    batch: SegmentBatch, width: int, height: int
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Sample count and the first/last sample that can land on the buffer.

    Samples outside the buffer (widened by the disk radius plus one pixel)
    are skipped without changing the spacing of the remaining ones. A
    segment with no visible sample gets ``first > last``.
    """

    delta = batch.end[:, :2] - batch.start[:, :2]
    steps = np.floor(np.max(np.abs(delta), axis=1)).astype(np.int64)

    radius = np.array([disk_radius(float(t)) for t in batch.thickness], dtype=np.float64)
    margin = radius + 1.0
    lower = -margin
    upper_x = width - 1 + margin
    upper_y = height - 1 + margin

    t_low = np.zeros(len(batch))
    t_high = np.ones(len(batch))
    visible = np.ones(len(batch), dtype=bool)
    x0 = batch.start[:, 0]
    y0 = batch.start[:, 1]
    boundaries = (
        (-delta[:, 0], x0 - lower),
        (delta[:, 0], upper_x - x0),
        (-delta[:, 1], y0 - lower),
        (delta[:, 1], upper_y - y0),
    )
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        for p, q in boundaries:
            visible &= ~((p == 0) & (q < 0))
            ratio = q / p
            t_low = np.where(p < 0, np.maximum(t_low, ratio), t_low)
            t_high = np.where(p > 0, np.minimum(t_high, ratio), t_high)

    # Near-parallel edges push the ratios to infinity.
    first = np.ceil(np.clip(t_low, 0.0, 1.0) * steps).astype(np.int64)
    last = np.floor(np.clip(t_high, 0.0, 1.0) * steps).astype(np.int64)
    point_only = steps == 0
    first = np.where(point_only, 0, first)
    last = np.where(point_only, np.where(t_low <= 0.0, 0, -1), last)
    visible &= t_low <= t_high
    last = np.where(visible, last, first - 1)
    return steps, first, last


def rasterize_loop(
    batch: SegmentBatch,
    pixels: np.ndarray,
    depth: np.ndarray,
    width: int,
    height: int,
) -> None:
    steps, first, last = step_ranges(batch, width, height)
    for index in range(len(batch)):
        x0, y0, z0 = (float(v) for v in batch.start[index])
        x1, y1, z1 = (float(v) for v in batch.end[index])
        c0 = [float(v) for v in batch.start_color[index]]
        c1 = [float(v) for v in batch.end_color[index]]
        n = int(steps[index])
        offsets = disk_offsets(disk_radius(float(batch.thickness[index])))
        for step in range(int(first[index]), int(last[index]) + 1):
            t = step / n if n else 0.0
            px = math.floor(x0 + t * (x1 - x0) + 0.5)
            py = math.floor(y0 + t * (y1 - y0) + 0.5)
            z = z0 + t * (z1 - z0)
            color = pack_color(
                (
                    c0[0] + t * (c1[0] - c0[0]),
                    c0[1] + t * (c1[1] - c0[1]),
                    c0[2] + t * (c1[2] - c0[2]),
                )
            )
            for dx, dy in offsets:
                x = px + dx
                y = py + dy
                if 0 <= x < width and 0 <= y < height:
                    slot = y * width + x
                    if z < depth[slot]:
                        depth[slot] = z
                        pixels[slot] = color


def rasterize_vectorized(
    batch: SegmentBatch,
    pixels: np.ndarray,
    depth: np.ndarray,
    width: int,
    height: int,
) -> None:
    steps, first, last = step_ranges(batch, width, height)
    counts = np.maximum(last - first + 1, 0)
    total = int(counts.sum())
    if total == 0:
        return

    segment = np.repeat(np.arange(len(batch)), counts)
    run_start = np.cumsum(counts) - counts
    step = np.arange(total) - np.repeat(run_start, counts) + first[segment]
    n = steps[segment]
    t = np.where(n > 0, step / np.maximum(n, 1), 0.0)

    start = batch.start[segment]
    delta = batch.end[segment] - start
    px = np.floor(start[:, 0] + t * delta[:, 0] + 0.5).astype(np.int64)
    py = np.floor(start[:, 1] + t * delta[:, 1] + 0.5).astype(np.int64)
    z = start[:, 2] + t * delta[:, 2]
    c0 = batch.start_color[segment]
    colors = pack_colors(c0 + t[:, None] * (batch.end_color[segment] - c0))

    radius = np.array([disk_radius(float(v)) for v in batch.thickness], dtype=np.int64)
    fragment_radius = radius[segment]
    max_offsets = len(disk_offsets(int(radius.max())))

    slots: list[np.ndarray] = []
    depths: list[np.ndarray] = []
    packed: list[np.ndarray] = []
    orders: list[np.ndarray] = []
    fragment_order = np.arange(total, dtype=np.int64) * max_offsets
    for value in np.unique(fragment_radius):
        selected = fragment_radius == value
        offsets = np.asarray(disk_offsets(int(value)), dtype=np.int64)
        x = px[selected][:, None] + offsets[None, :, 0]
        y = py[selected][:, None] + offsets[None, :, 1]
        order = fragment_order[selected][:, None] + np.arange(len(offsets))[None, :]
        inside = (x >= 0) & (x < width) & (y >= 0) & (y < height)
        count = len(offsets)
        slots.append((y * width + x)[inside])
        depths.append(np.repeat(z[selected], count).reshape(-1, count)[inside])
        packed.append(np.repeat(colors[selected], count).reshape(-1, count)[inside])
        orders.append(order[inside])

    slot = np.concatenate(slots)
    if slot.size == 0:
        return
    frag_depth = np.concatenate(depths)
    frag_color = np.concatenate(packed)
    frag_order = np.concatenate(orders)

    ranking = np.lexsort((frag_order, frag_depth, slot))
    sorted_slots = slot[ranking]
    _, first_of_slot = np.unique(sorted_slots, return_index=True)
    winners = ranking[first_of_slot]

    win_slot = slot[winners]
    win_depth = frag_depth[winners]
    nearer = win_depth < depth[win_slot]
    depth[win_slot[nearer]] = win_depth[nearer]
    pixels[win_slot[nearer]] = frag_color[winners][nearer]


def rasterize(
    strategy: RasterStrategy,
    batch: SegmentBatch,
    pixels: np.ndarray,
    depth: np.ndarray,
    width: int,
    height: int,
) -> None:
    if len(batch) == 0:
        return
    if strategy == RasterStrategy.LOOP:
        rasterize_loop(batch, pixels, depth, width, height)
    else:
        rasterize_vectorized(batch, pixels, depth, width, height)
