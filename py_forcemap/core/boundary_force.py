"""
Zone boundary force for d3-style force simulations.

A BoundaryForce keeps the nodes bound to it inside one grid zone. Each
simulation tick the engine calls ``step(alpha)``; nodes that crossed an
edge (or sit within ``radius`` of it) get a velocity nudge back toward
the interior, proportional to how far past the edge they are. Positions
are never touched, the engine integrates them after all forces ran.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional, Sequence, Union

import structlog

from ..config import get_settings
from .exceptions import UnboundForceError
from .zone_grid import Zone

logger = structlog.get_logger()

RadiusOption = Union[float, Callable[[Any], float]]


@dataclass
class ForceNode:
    """Simulation node with position, velocity and free-form extra fields."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    index: Optional[int] = None
    data: Dict[str, Any] = field(default_factory=dict)


class BoundaryForce:
    """
    Confines a set of nodes to a single zone.

    The force holds a non-owning reference to the node sequence passed to
    ``bind``; mutating that sequence outside changes what the next step
    sees. Rebinding replaces it.
    """

    def __init__(self, zone: Zone, strength: float = 0.2, radius: RadiusOption = 0.0):
        """
        Args:
            zone: Zone to keep nodes within
            strength: Correction factor. Values above ~2 may overshoot and
                oscillate; that is left to the caller.
            radius: Fixed inflation applied to every node, or a callable
                ``radius(node)`` evaluated for every node on every step
        """
        self._zone = zone
        self._strength = strength
        self._radius = radius
        self._nodes: Optional[Sequence[Any]] = None

        max_strength = get_settings().max_recommended_strength
        if strength > max_strength:
            logger.warning("Boundary force strength outside intended range",
                           strength=strength, max_recommended=max_strength)

    @property
    def zone(self) -> Zone:
        return self._zone

    @property
    def strength(self) -> float:
        return self._strength

    @property
    def radius(self) -> RadiusOption:
        return self._radius

    @property
    def nodes(self) -> Optional[Sequence[Any]]:
        return self._nodes

    @property
    def is_bound(self) -> bool:
        return self._nodes is not None

    def bind(self, nodes: Sequence[Any]) -> "BoundaryForce":
        """Set or replace the nodes this force acts on."""
        self._nodes = nodes
        logger.debug("Boundary force bound",
                     node_count=len(nodes),
                     left=self._zone.left, top=self._zone.top)
        return self

    # d3-force calls this when the force is registered on a simulation
    initialize = bind

    def step(self, alpha: float) -> None:
        """
        Apply one correction pass over the bound nodes.

        The four edge checks are independent, so a node past a corner gets
        both its horizontal and vertical correction in the same tick.

        Args:
            alpha: Simulation decay factor, trusted as given

        Raises:
            UnboundForceError: if ``bind`` was never called
        """
        if self._nodes is None:
            raise UnboundForceError(
                "ForceMap: boundary force stepped before nodes were bound; call bind() first"
            )

        zone = self._zone
        strength = self._strength
        radius = self._radius
        radius_is_callable = callable(radius)

        for node in self._nodes:
            r = radius(node) if radius_is_callable else radius

            if node.x + r > zone.right:
                node.vx -= (node.x - zone.right + r) * strength * alpha
            if node.x - r < zone.left:
                node.vx += (zone.left - node.x + r) * strength * alpha
            if node.y + r > zone.bottom:
                node.vy -= (node.y - zone.bottom + r) * strength * alpha
            if node.y - r < zone.top:
                node.vy += (zone.top - node.y + r) * strength * alpha

    __call__ = step


def zone_boundary_force(zone: Zone, strength: Optional[float] = None,
                        radius: Optional[RadiusOption] = None) -> BoundaryForce:
    """
    Create a boundary force for a zone.

    Omitted arguments fall back to ``default_strength`` (0.2) and
    ``default_radius`` (0) from the settings.

    Args:
        zone: Zone to confine nodes to
        strength: Correction factor
        radius: Fixed radius or per-node radius callable

    Returns:
        Unbound BoundaryForce; call ``bind(nodes)`` before stepping
    """
    settings = get_settings()
    if strength is None:
        strength = settings.default_strength
    if radius is None:
        radius = settings.default_radius
    return BoundaryForce(zone, strength=strength, radius=radius)
