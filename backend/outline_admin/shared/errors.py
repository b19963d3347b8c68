"""
Console error taxonomy.

Hard failures (ParseError, PersistenceFailure, AccessDenied) reach the user.
ResolutionUnavailable never leaves the geocoding layer.
"""


class OutlineError(Exception):
    """Base console error."""
    pass


class ParseError(OutlineError):
    """Track file has no coordinates element."""
    pass


class ResolutionUnavailable(OutlineError):
    """Geocoding failed or returned nothing."""
    pass


class PersistenceFailure(OutlineError):
    """Document or blob store rejected a write."""
    pass


class AccessDenied(OutlineError):
    """Wrong or missing console password."""
    pass
