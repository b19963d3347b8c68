"""
Shared utilities (NOT business logic).

Usage:
    from outline_admin.shared import haversine, track_length_km
    from outline_admin.shared.errors import ParseError
"""
from .geo import (
    haversine,
    track_length_km,
    EARTH_RADIUS_KM,
)
from .errors import (
    OutlineError,
    ParseError,
    ResolutionUnavailable,
    PersistenceFailure,
    AccessDenied,
)
from .repository import BaseRepository
from .access import PasswordGate
