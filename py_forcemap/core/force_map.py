"""
Force map state.

Holds the container size, grid counts and the zone grid derived from them
as an immutable snapshot. Resizing builds a fresh snapshot with a freshly
computed grid; the previous snapshot and its zones are left untouched.
Boundary forces created from an older grid keep the old zone geometry, so
callers recreate them after a resize.
"""

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import structlog

from ..config import get_settings
from .boundary_force import BoundaryForce, RadiusOption, zone_boundary_force
from .exceptions import ValidationError
from .zone_grid import ZoneCenter, ZoneGrid, create_zone_grid

logger = structlog.get_logger()

ZoneKey = Tuple[int, int]


@dataclass(frozen=True)
class ForceMapState:
    """Snapshot of a force map: container metadata plus its zone grid."""
    container_width: float
    container_height: float
    container_center: ZoneCenter
    zones: ZoneGrid
    rows: int
    cols: int


def _require_container(width: Optional[float], height: Optional[float]) -> None:
    if width is None or height is None:
        raise ValidationError(
            "ForceMap: container is not initialized; width and height are required"
        )


def _build_state(width: float, height: float, cols: int, rows: int) -> ForceMapState:
    zones = create_zone_grid(width, height, cols, rows)
    return ForceMapState(
        container_width=width,
        container_height=height,
        container_center=ZoneCenter(x=width / 2, y=height / 2),
        zones=zones,
        rows=rows,
        cols=cols,
    )


def init_force_map(container_width: float, container_height: float,
                   cols: Optional[int] = None, rows: Optional[int] = None) -> ForceMapState:
    """
    Build the initial force map state for a container.

    Args:
        container_width: Measured container width
        container_height: Measured container height
        cols: Number of grid columns (>= 1), settings ``default_cols`` when omitted
        rows: Number of grid rows (>= 1), settings ``default_rows`` when omitted

    Returns:
        ForceMapState with a freshly computed grid

    Raises:
        ValidationError: if the container size is missing or any value is invalid
    """
    _require_container(container_width, container_height)

    settings = get_settings()
    if cols is None:
        cols = settings.default_cols
    if rows is None:
        rows = settings.default_rows
    return _build_state(container_width, container_height, cols, rows)


def resize_grid(state: ForceMapState, new_width: float, new_height: float,
                new_cols: Optional[int] = None,
                new_rows: Optional[int] = None) -> ForceMapState:
    """
    Derive a new state for a resized container and/or new grid counts.

    ``None`` counts keep the previous values. Any value that is passed,
    including 0, goes through the same validation as construction. The
    grid is always recomputed in full.

    Returns:
        New ForceMapState; ``state`` is not modified
    """
    _require_container(new_width, new_height)

    cols = state.cols if new_cols is None else new_cols
    rows = state.rows if new_rows is None else new_rows

    resized = _build_state(new_width, new_height, cols, rows)

    logger.info("Resized force map",
                width=new_width, height=new_height, cols=cols, rows=rows,
                previous_width=state.container_width,
                previous_height=state.container_height)
    return resized


class ForceMap:
    """Holder that owns the current force map snapshot."""

    def __init__(self, container_width: float, container_height: float,
                 cols: Optional[int] = None, rows: Optional[int] = None):
        self._state = init_force_map(container_width, container_height, cols, rows)

    @property
    def state(self) -> ForceMapState:
        return self._state

    @property
    def zones(self) -> ZoneGrid:
        return self._state.zones

    def resize(self, width: float, height: float,
               cols: Optional[int] = None, rows: Optional[int] = None) -> ForceMapState:
        """Replace the held snapshot with a resized one and return it.

        On a validation error the held snapshot is unchanged.
        """
        self._state = resize_grid(self._state, width, height, cols, rows)
        return self._state

    def boundary_forces(self, nodes_by_zone: Mapping[ZoneKey, Sequence[Any]],
                        strength: Optional[float] = None,
                        radius: Optional[RadiusOption] = None) -> Dict[ZoneKey, BoundaryForce]:
        """
        Create one bound boundary force per zone for the current grid.

        Args:
            nodes_by_zone: Nodes assigned to each (row, col)
            strength: Correction factor, settings default when omitted
            radius: Fixed or per-node radius, settings default when omitted

        Returns:
            Mapping of (row, col) to a BoundaryForce bound to that zone's nodes
        """
        zones = self._state.zones
        forces = {}
        for (row, col), nodes in nodes_by_zone.items():
            force = zone_boundary_force(zones.zone(row, col), strength, radius)
            forces[(row, col)] = force.bind(nodes)
        return forces
