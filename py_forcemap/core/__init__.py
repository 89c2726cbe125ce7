"""
Core force map functionality.
"""

from .exceptions import ForceMapError, ValidationError, UnboundForceError
from .zone_grid import Zone, ZoneCenter, ZoneGrid, create_zone_grid
from .boundary_force import BoundaryForce, ForceNode, zone_boundary_force
from .force_map import ForceMap, ForceMapState, init_force_map, resize_grid

__all__ = ['ForceMapError', 'ValidationError', 'UnboundForceError',
           'Zone', 'ZoneCenter', 'ZoneGrid', 'create_zone_grid',
           'BoundaryForce', 'ForceNode', 'zone_boundary_force',
           'ForceMap', 'ForceMapState', 'init_force_map', 'resize_grid']
