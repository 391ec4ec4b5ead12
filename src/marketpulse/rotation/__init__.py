"""Relative Rotation Graph module.

Provides the RS-Ratio / RS-Momentum computation for one window, trail
building with graceful truncation, quadrant classification, the trail
cache, and the RotationEngine that builds a whole graph of symbols against
one benchmark.
"""

from marketpulse.rotation.cache import TrailCache, TrailKey, candle_fingerprint
from marketpulse.rotation.engine import RotationEngine
from marketpulse.rotation.models import (
    Quadrant,
    RotationCoordinates,
    RotationPoint,
    SecurityRotation,
)
from marketpulse.rotation.rrg import (
    build_rotation_trail,
    classify_quadrant,
    compute_rotation_point,
)

__all__ = [
    "Quadrant",
    "RotationCoordinates",
    "RotationEngine",
    "RotationPoint",
    "SecurityRotation",
    "TrailCache",
    "TrailKey",
    "build_rotation_trail",
    "candle_fingerprint",
    "classify_quadrant",
    "compute_rotation_point",
]
