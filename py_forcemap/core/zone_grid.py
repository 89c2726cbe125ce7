"""Zone grid generation for force map layouts."""

import math
import numbers
from dataclasses import dataclass
from typing import Iterator, Tuple

import numpy as np
import structlog

from .exceptions import ValidationError

logger = structlog.get_logger()


@dataclass(frozen=True)
class ZoneCenter:
    """Midpoint of a zone (or of the whole container)."""
    x: float
    y: float


@dataclass(frozen=True)
class Zone:
    """Axis-aligned rectangular cell of the grid.

    Coordinates use a top-left origin, so ``top < bottom``.
    """
    left: float
    right: float
    top: float
    bottom: float
    width: float
    height: float
    center: ZoneCenter

    def contains(self, x: float, y: float, radius: float = 0.0) -> bool:
        """Check whether a point, inflated by ``radius``, lies inside the zone.

        Uses the same four comparisons as the boundary force, so a node for
        which this returns True receives no correction.
        """
        return not (
            x + radius > self.right
            or x - radius < self.left
            or y + radius > self.bottom
            or y - radius < self.top
        )


@dataclass(frozen=True)
class ZoneGrid:
    """Row-major 2-D collection of equally sized zones.

    Indexed as ``grid[row][col]``; row 0 is the top band and col 0 the
    left band. Instances are immutable and compare by value.
    """
    container_width: float
    container_height: float
    cols: int
    rows: int
    zone_width: float
    zone_height: float
    cells: Tuple[Tuple[Zone, ...], ...]

    def __getitem__(self, row: int) -> Tuple[Zone, ...]:
        return self.cells[row]

    def __len__(self) -> int:
        return self.rows

    def __iter__(self) -> Iterator[Tuple[Zone, ...]]:
        return iter(self.cells)

    def zone(self, row: int, col: int) -> Zone:
        """Zone at (row, col); negative indices are not allowed."""
        if not (0 <= row < self.rows and 0 <= col < self.cols):
            raise ValidationError(
                f"ForceMap: zone ({row}, {col}) is outside the {self.rows}x{self.cols} grid"
            )
        return self.cells[row][col]

    def zones(self) -> Iterator[Zone]:
        """Iterate over all zones in row-major order."""
        for row in self.cells:
            yield from row

    def locate(self, x: float, y: float) -> Tuple[int, int]:
        """
        Find the (row, col) of the zone holding a point.

        Points on a shared edge belong to the right/lower zone. Points
        outside the container are clamped to the nearest edge zone.

        Args:
            x, y: Coordinates to find

        Returns:
            (row, col) tuple
        """
        col = int(math.floor(x / self.zone_width))
        row = int(math.floor(y / self.zone_height))

        col = min(max(col, 0), self.cols - 1)
        row = min(max(row, 0), self.rows - 1)
        return row, col

    def bounds_array(self) -> np.ndarray:
        """Zone bounds as a (rows, cols, 4) array of left, top, right, bottom."""
        return np.array(
            [[(z.left, z.top, z.right, z.bottom) for z in row] for row in self.cells],
            dtype=np.float64,
        )

    def centers_array(self) -> np.ndarray:
        """Zone centers as a (rows, cols, 2) array of x, y."""
        return np.array(
            [[(z.center.x, z.center.y) for z in row] for row in self.cells],
            dtype=np.float64,
        )


def _is_count(value) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _is_dimension(value) -> bool:
    return (isinstance(value, numbers.Real) and not isinstance(value, bool)
            and math.isfinite(value))


def validate_grid_parameters(container_width: float, container_height: float,
                             cols: int, rows: int) -> None:
    """
    Check container dimensions and grid counts.

    Raises:
        ValidationError: naming the first precondition that failed
    """
    if not _is_dimension(container_width) or not container_width > 0:
        raise ValidationError(
            f"ForceMap: container width must be a finite number greater than 0 (got {container_width!r})"
        )
    if not _is_dimension(container_height) or not container_height > 0:
        raise ValidationError(
            f"ForceMap: container height must be a finite number greater than 0 (got {container_height!r})"
        )
    if not _is_count(cols) or cols < 1:
        raise ValidationError(
            f"ForceMap: column count must be an integer of at least 1 (got {cols!r})"
        )
    if not _is_count(rows) or rows < 1:
        raise ValidationError(
            f"ForceMap: row count must be an integer of at least 1 (got {rows!r})"
        )


def create_zone_grid(container_width: float, container_height: float,
                     cols: int, rows: int) -> ZoneGrid:
    """
    Split a container into a cols x rows grid of equal zones.

    Zone edges are additive: ``right = left + zone_width`` and
    ``bottom = top + zone_height``. The last column's right edge is not
    clamped to ``container_width``, so float error stays consistent
    across the grid instead of being corrected in the final band.

    Args:
        container_width: Width of the container
        container_height: Height of the container
        cols: Number of columns (>= 1)
        rows: Number of rows (>= 1)

    Returns:
        ZoneGrid indexed as grid[row][col]

    Raises:
        ValidationError: if any dimension or count is invalid
    """
    validate_grid_parameters(container_width, container_height, cols, rows)

    zone_width = container_width / cols
    zone_height = container_height / rows

    cells = []
    for row in range(rows):
        top = row * zone_height
        bottom = top + zone_height
        band = []
        for col in range(cols):
            left = col * zone_width
            right = left + zone_width
            band.append(Zone(
                left=left,
                right=right,
                top=top,
                bottom=bottom,
                width=zone_width,
                height=zone_height,
                center=ZoneCenter(x=(left + right) / 2, y=(top + bottom) / 2),
            ))
        cells.append(tuple(band))

    logger.info("Zone grid created",
                width=container_width, height=container_height,
                cols=cols, rows=rows)

    return ZoneGrid(
        container_width=container_width,
        container_height=container_height,
        cols=cols,
        rows=rows,
        zone_width=zone_width,
        zone_height=zone_height,
        cells=tuple(cells),
    )
