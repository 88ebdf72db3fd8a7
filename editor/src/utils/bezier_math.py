"""Cubic Bezier math primitives.

Stateless helpers shared by the curve model and the interaction layer:
- Bernstein-form evaluation and analytic tangent
- De Casteljau construction (auditable alternative to the closed form)
- Sampling-based distance and length approximations
- Smooth tangent estimation for auto-tangent points

All functions accept Vec2 (or any (x, y) pair) control points and return Vec2
or float values. Parameters outside [0, 1] are clamped.
"""

import numpy as np

from constants import DEFAULT_SAMPLE_COUNT, SMOOTH_TANGENT_WEIGHT
from models.transform import Vec2


def _clamp01(t):
    return max(0.0, min(1.0, float(t)))


def evaluate_cubic(p0, p1, p2, p3, t):
    """Evaluate a cubic Bezier segment at parameter t.

    B(t) = (1-t)^3 P0 + 3(1-t)^2 t P1 + 3(1-t) t^2 P2 + t^3 P3

    Args:
        p0: Start anchor
        p1: First control point
        p2: Second control point
        p3: End anchor
        t: Parameter, clamped to [0, 1]

    Returns:
        Vec2 point on the segment
    """
    p0, p1, p2, p3 = Vec2.of(p0), Vec2.of(p1), Vec2.of(p2), Vec2.of(p3)
    t = _clamp01(t)
    u = 1.0 - t
    tt = t * t
    uu = u * u
    uuu = uu * u
    ttt = tt * t

    point = p0 * uuu
    point = point + p1 * (3.0 * uu * t)
    point = point + p2 * (3.0 * u * tt)
    point = point + p3 * ttt
    return point


def tangent_cubic(p0, p1, p2, p3, t):
    """Analytic derivative of a cubic Bezier segment.

    B'(t) = 3(1-t)^2 (P1-P0) + 6(1-t)t (P2-P1) + 3t^2 (P3-P2)
    """
    p0, p1, p2, p3 = Vec2.of(p0), Vec2.of(p1), Vec2.of(p2), Vec2.of(p3)
    t = _clamp01(t)
    u = 1.0 - t

    tangent = (p1 - p0) * (3.0 * u * u)
    tangent = tangent + (p2 - p1) * (6.0 * u * t)
    tangent = tangent + (p3 - p2) * (3.0 * t * t)
    return tangent


def de_casteljau(p0, p1, p2, p3, t):
    """Evaluate by repeated linear interpolation (De Casteljau).

    Matches evaluate_cubic within floating-point tolerance.
    """
    p0, p1, p2, p3 = Vec2.of(p0), Vec2.of(p1), Vec2.of(p2), Vec2.of(p3)
    t = float(t)
    if t <= 0.0:
        return p0
    if t >= 1.0:
        return p3

    q0 = p0.lerp(p1, t)
    q1 = p1.lerp(p2, t)
    q2 = p2.lerp(p3, t)

    r0 = q0.lerp(q1, t)
    r1 = q1.lerp(q2, t)

    return r0.lerp(r1, t)


def sample_cubic(p0, p1, p2, p3, samples=DEFAULT_SAMPLE_COUNT):
    """Sample a segment at samples+1 uniformly spaced parameters.

    Returns:
        numpy array of shape (samples + 1, 2)
    """
    samples = max(1, int(samples))
    control = np.array([tuple(Vec2.of(p)) for p in (p0, p1, p2, p3)], dtype=float)
    t = np.linspace(0.0, 1.0, samples + 1)[:, None]
    u = 1.0 - t
    return (u * u * u * control[0]
            + 3.0 * u * u * t * control[1]
            + 3.0 * u * t * t * control[2]
            + t * t * t * control[3])


def distance_to_curve(point, p0, p1, p2, p3, samples=DEFAULT_SAMPLE_COUNT):
    """Approximate minimum distance from point to the segment.

    Measured against samples+1 uniform parameter samples, not an exact
    projection.
    """
    point = Vec2.of(point)
    polyline = sample_cubic(p0, p1, p2, p3, samples)
    deltas = polyline - np.array([point.x, point.y])
    return float(np.min(np.hypot(deltas[:, 0], deltas[:, 1])))


def curve_length(p0, p1, p2, p3, samples=DEFAULT_SAMPLE_COUNT):
    """Approximate arc length as the length of the sampled polyline"""
    polyline = sample_cubic(p0, p1, p2, p3, samples)
    steps = np.diff(polyline, axis=0)
    return float(np.sum(np.hypot(steps[:, 0], steps[:, 1])))


def smooth_tangent(prev_point, current_point, next_point, weight=SMOOTH_TANGENT_WEIGHT):
    """Estimate a smooth outgoing tangent for current_point.

    Averages the unit directions prev->current and current->next. A neighbour
    passed as None or as the zero vector counts as absent and its side is
    skipped. The averaged direction is scaled by weight times the distance
    between the effective neighbours.

    Returns:
        Vec2 tangent offset, zero vector when both neighbours are absent
    """
    if prev_point is not None and Vec2.of(prev_point).is_zero():
        prev_point = None
    if next_point is not None and Vec2.of(next_point).is_zero():
        next_point = None
    return neighbour_tangent(prev_point, current_point, next_point, weight)


def neighbour_tangent(prev_point, current_point, next_point, weight=SMOOTH_TANGENT_WEIGHT):
    """Smooth tangent where only None marks a missing neighbour.

    Same averaging as smooth_tangent, but a neighbour at the origin is a real
    neighbour. Used for curve points, which may sit anywhere.
    """
    current_point = Vec2.of(current_point)
    has_prev = prev_point is not None
    has_next = next_point is not None
    prev_point = Vec2.of(prev_point) if has_prev else current_point
    next_point = Vec2.of(next_point) if has_next else current_point
    if not has_prev and not has_next:
        return Vec2.ZERO

    direction = Vec2.ZERO
    if has_prev:
        direction = direction + (current_point - prev_point).normalized()
    if has_next:
        direction = direction + (next_point - current_point).normalized()
    direction = direction.normalized()
    return direction * (prev_point.distance(next_point) * weight)
