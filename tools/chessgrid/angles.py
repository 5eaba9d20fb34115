"""Angle helpers for bearings (radians)."""

from __future__ import annotations

import math

TWO_PI = 2.0 * math.pi
HALF_PI = 0.5 * math.pi


def bound(angle: float) -> float:
    """Wrap an angle into (-pi, pi]."""
    angle = math.fmod(angle, TWO_PI)
    if angle > math.pi:
        angle -= TWO_PI
    elif angle <= -math.pi:
        angle += TWO_PI
    return angle


def bound_half(angle: float) -> float:
    """Wrap an axis angle (defined modulo pi) into [-pi/2, pi/2]."""
    angle = bound(angle)
    if angle > HALF_PI:
        angle -= math.pi
    elif angle < -HALF_PI:
        angle += math.pi
    return angle


def distance_ccw(ang_a: float, ang_b: float) -> float:
    """Rotation needed to go counter-clockwise from ``ang_a`` to ``ang_b``."""
    if ang_b >= ang_a:
        return math.fmod(ang_b - ang_a, TWO_PI)
    return TWO_PI - math.fmod(ang_a - ang_b, TWO_PI)


def distance_cw(ang_a: float, ang_b: float) -> float:
    """Rotation needed to go clockwise from ``ang_a`` to ``ang_b``."""
    if ang_a >= ang_b:
        return math.fmod(ang_a - ang_b, TWO_PI)
    return TWO_PI - math.fmod(ang_b - ang_a, TWO_PI)


def dist_half(ang_a: float, ang_b: float) -> float:
    """Acute distance in [0, pi/2] between two axis angles."""
    d = abs(bound_half(ang_a) - bound_half(ang_b))
    if d <= HALF_PI:
        return d
    return math.pi - d
