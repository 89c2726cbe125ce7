"""Error types raised by the force map core."""


class ForceMapError(Exception):
    """Base class for force map errors."""


class ValidationError(ForceMapError, ValueError):
    """Raised when container dimensions or grid counts are invalid."""


class UnboundForceError(ForceMapError, RuntimeError):
    """Raised when a boundary force is stepped before any nodes were bound."""
