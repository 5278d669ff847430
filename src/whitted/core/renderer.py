"""Frame rendering: viewport projection, band rendering and parallel dispatch.

Every output cell ``(ix, iy)`` is mapped to a point on the viewport, turned
into a camera-space direction ``(x, y, viewport_distance)``, rotated by the
camera orientation and traced from the camera position.

The mapping uses the *center* of each cell:

    canvas_x = ((ix + 0.5) / width  - 0.5) * canvas_width
    canvas_y = (0.5 - (iy + 0.5) / height) * canvas_height   (y flipped)
    x = canvas_x * viewport_width * (width / height) * pixel_ar / canvas_width
    y = canvas_y * viewport_height / canvas_height

so the viewport's horizontal span follows the grid's aspect ratio and the
pixel aspect ratio, and a 1x1 grid looks straight down the view axis.

Parallel rendering takes the scene's read lock once for the whole frame,
splits the rows into contiguous bands, renders each band on its own thread
into a private ArraySurface, then copies the bands into the destination
surface on the calling thread. A writer waits until every band of the frame
has finished. No destination cell is written by more than one band, and the
result is identical to a single-threaded render.

Example:
    >>> from whitted.core.renderer import render, render_parallel
    >>> from whitted.surface import ArraySurface
    >>> surface = ArraySurface(160, 120)
    >>> render_parallel(scene, surface, worker_count=4)
"""

from __future__ import annotations

import logging
import math
import os
import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import NamedTuple

from whitted.core.shading import EPSILON
from whitted.core.tracer import MAX_DEPTH, trace_ray
from whitted.core.vector import Vector3
from whitted.scene.model import Scene, Specs
from whitted.scene.shared import SharedScene, as_shared
from whitted.surface.arrays import ArraySurface
from whitted.surface.base import Surface

logger = logging.getLogger(__name__)

# Primary rays start at the viewport, one viewport distance from the camera
T_MIN = 1.0


def default_worker_count() -> int:
    """Number of worker threads used when none is given."""
    return os.cpu_count() or 1


@dataclass(frozen=True)
class RenderSettings:
    """Tunable parameters shared by every renderer entry point.

    Attributes:
        max_depth: Recursion budget for reflection and transparency rays.
        epsilon: Near distance for secondary and shadow rays.
        t_min: Near distance for primary rays.
        workers: Default worker count for render_parallel().
    """

    max_depth: int = MAX_DEPTH
    epsilon: float = EPSILON
    t_min: float = T_MIN
    workers: int = field(default_factory=default_worker_count)


class Projection(NamedTuple):
    """Per-frame constants of the cell-to-viewport mapping."""

    half_width: float
    half_height: float
    x_scale: float
    y_scale: float
    distance: float


def projection(specs: Specs, width: int, height: int) -> Projection:
    """Compute the cell-to-viewport constants for a width x height grid."""
    viewport_width = specs.viewport_width * (width / height) * specs.pixel_ar
    return Projection(
        half_width=specs.canvas_width * 0.5,
        half_height=specs.canvas_height * 0.5,
        x_scale=viewport_width / specs.canvas_width,
        y_scale=specs.viewport_height / specs.canvas_height,
        distance=specs.viewport_distance,
    )


def _map(value: float, lo: float, hi: float, new_lo: float, new_hi: float) -> float:
    return new_lo + (new_hi - new_lo) * ((value - lo) / (hi - lo))


def _direction(proj: Projection, ix: int, iy: int, width: int, height: int) -> Vector3:
    cx = _map(ix + 0.5, 0.0, width, -proj.half_width, proj.half_width)
    cy = _map(iy + 0.5, 0.0, height, proj.half_height, -proj.half_height)
    return Vector3(cx * proj.x_scale, cy * proj.y_scale, proj.distance)


def viewport_direction(specs: Specs, ix: int, iy: int, width: int, height: int) -> Vector3:
    """Camera-space direction through the center of cell ``(ix, iy)``.

    Args:
        specs: Camera and viewport settings.
        ix: Column of the cell, 0 at the left.
        iy: Row of the cell, 0 at the top.
        width: Number of columns in the full frame.
        height: Number of rows in the full frame.

    Returns:
        The unrotated direction ``(x, y, viewport_distance)``.
    """
    return _direction(projection(specs, width, height), ix, iy, width, height)


def primary_ray(
    specs: Specs, ix: int, iy: int, width: int, height: int
) -> tuple[Vector3, Vector3]:
    """World-space ``(origin, direction)`` of the primary ray for a cell."""
    d = viewport_direction(specs, ix, iy, width, height)
    return specs.camera_pos, specs.camera_orientation.rotate(d)


def render_band(
    scene: Scene | SharedScene,
    surface: Surface,
    row_start: int,
    row_end: int,
    full_height: int,
    settings: RenderSettings | None = None,
) -> None:
    """Render rows ``[row_start, row_end)`` of a ``full_height``-row frame.

    Row ``row_start`` of the frame is written to row 0 of ``surface``, so the
    surface may be a band-sized buffer or, with ``row_start == 0``, the full
    frame. The surface width is the frame width. The scene's read lock is
    held for the whole band.

    Args:
        scene: The scene, plain or shared.
        surface: Destination with at least ``row_end - row_start`` rows.
        row_start: First frame row to render.
        row_end: One past the last frame row to render.
        full_height: Height of the whole frame, used for the projection.
        settings: Render parameters. Defaults to RenderSettings().

    Raises:
        ValueError: If the row range is reversed or exceeds the frame,
            or the surface is too short for the band.
    """
    if not 0 <= row_start <= row_end <= full_height:
        raise ValueError(
            f"Invalid band [{row_start}, {row_end}) for frame height {full_height}"
        )
    if surface.height < row_end - row_start:
        raise ValueError(
            f"Surface has {surface.height} rows, band needs {row_end - row_start}"
        )
    settings = settings or RenderSettings()
    width = surface.width

    with as_shared(scene).read() as snapshot:
        specs = snapshot.specs
        proj = projection(specs, width, full_height)
        origin = specs.camera_pos
        orientation = specs.camera_orientation

        for iy in range(row_start, row_end):
            for ix in range(width):
                direction = orientation.rotate(_direction(proj, ix, iy, width, full_height))
                color = trace_ray(
                    origin,
                    direction,
                    settings.t_min,
                    math.inf,
                    snapshot,
                    None,
                    settings.max_depth,
                    settings.epsilon,
                )
                surface.set_value(ix, iy - row_start, color)


def render(
    scene: Scene | SharedScene,
    surface: Surface,
    settings: RenderSettings | None = None,
) -> None:
    """Render the full frame on the calling thread."""
    start = time.perf_counter()
    render_band(scene, surface, 0, surface.height, surface.height, settings)
    logger.debug(
        "Rendered %dx%d frame in %.3fs",
        surface.width,
        surface.height,
        time.perf_counter() - start,
    )


def band_ranges(height: int, worker_count: int) -> list[tuple[int, int]]:
    """Split ``[0, height)`` into contiguous row bands, one per worker.

    Band ``i`` covers ``[i * height // n, (i + 1) * height // n)`` and the
    last band always ends at ``height``. Empty bands (more workers than
    rows) are dropped, so every returned band has at least one row.

    Raises:
        ValueError: If ``worker_count`` is less than 1 or height is negative.
    """
    if worker_count < 1:
        raise ValueError(f"worker_count must be at least 1, got {worker_count}")
    if height < 0:
        raise ValueError(f"height must be non-negative, got {height}")

    bands = []
    for i in range(worker_count):
        start = i * height // worker_count
        end = height if i == worker_count - 1 else (i + 1) * height // worker_count
        if end > start:
            bands.append((start, end))
    return bands


def _render_private_band(
    scene: Scene,
    width: int,
    row_start: int,
    row_end: int,
    full_height: int,
    settings: RenderSettings,
) -> ArraySurface:
    band = ArraySurface(width, row_end - row_start)
    render_band(scene, band, row_start, row_end, full_height, settings)
    return band


def render_parallel(
    scene: Scene | SharedScene,
    surface: Surface,
    worker_count: int | None = None,
    settings: RenderSettings | None = None,
) -> None:
    """Render the full frame with one worker thread per row band.

    The scene's read lock is held once for the whole frame, from before the
    first band starts until the last band has finished, so a writer waits for
    the entire frame. A fresh thread pool is created for the frame and shut
    down before returning. Each worker renders into its own ArraySurface; the
    bands are then copied into ``surface`` on the calling thread. The output is
    identical to render().

    Args:
        scene: The scene, plain or shared. A plain scene is wrapped in a
            SharedScene for the duration of the frame.
        surface: Destination surface.
        worker_count: Number of bands. Defaults to ``settings.workers``.
        settings: Render parameters. Defaults to RenderSettings().

    Raises:
        ValueError: If ``worker_count`` is less than 1.
        Exception: Whatever a worker raised, re-raised on the calling thread.
    """
    settings = settings or RenderSettings()
    workers = settings.workers if worker_count is None else worker_count
    bands = band_ranges(surface.height, workers)
    shared = as_shared(scene)
    width, height = surface.width, surface.height

    start = time.perf_counter()
    # One read lock for the whole frame; bands get the plain scene
    with shared.read() as snapshot:
        with ThreadPoolExecutor(
            max_workers=len(bands), thread_name_prefix="whitted-band"
        ) as executor:
            futures = [
                (row_start, executor.submit(
                    _render_private_band, snapshot, width, row_start, row_end, height, settings
                ))
                for row_start, row_end in bands
            ]
            results = [(row_start, future.result()) for row_start, future in futures]

    for row_start, band in results:
        surface.copy_rows_from(band, row_start)

    logger.debug(
        "Rendered %dx%d frame on %d bands in %.3fs",
        width,
        height,
        len(bands),
        time.perf_counter() - start,
    )
