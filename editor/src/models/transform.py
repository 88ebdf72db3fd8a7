"""Vector and rectangle value types shared by every coordinate space."""
import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Vec2:
    """2D vector for coordinate pairs.

    Used for any x/y pair across the engine's spaces:
    - Curve space (anchors, handle offsets, view bounds)
    - Normalized view space (0-1 before zoom/pan)
    - Screen space (host pixels, Y-down)
    """
    x: float = 0.0
    y: float = 0.0

    def __iter__(self):
        """Allow tuple unpacking: x, y = vec2"""
        return iter((self.x, self.y))

    def __add__(self, other):
        return Vec2(self.x + other.x, self.y + other.y)

    def __sub__(self, other):
        return Vec2(self.x - other.x, self.y - other.y)

    def __mul__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.x * other.x, self.y * other.y)
        return Vec2(self.x * other, self.y * other)

    __rmul__ = __mul__

    def __truediv__(self, other):
        if isinstance(other, Vec2):
            return Vec2(self.x / other.x, self.y / other.y)
        return Vec2(self.x / other, self.y / other)

    def __neg__(self):
        return Vec2(-self.x, -self.y)

    @classmethod
    def of(cls, value) -> 'Vec2':
        """Coerce a Vec2 or any (x, y) pair to a Vec2 of floats"""
        if isinstance(value, Vec2):
            return value
        x, y = value
        return cls(float(x), float(y))

    def length(self) -> float:
        return math.hypot(self.x, self.y)

    def normalized(self) -> 'Vec2':
        """Unit vector in the same direction, zero vector for (near) zero length"""
        magnitude = self.length()
        if magnitude < 1e-12:
            return Vec2(0.0, 0.0)
        return Vec2(self.x / magnitude, self.y / magnitude)

    def distance(self, other) -> float:
        return math.hypot(self.x - other.x, self.y - other.y)

    def lerp(self, other, t: float) -> 'Vec2':
        """Unclamped linear interpolation towards other"""
        return Vec2(self.x + (other.x - self.x) * t, self.y + (other.y - self.y) * t)

    def is_zero(self) -> bool:
        return self.x == 0.0 and self.y == 0.0

    def to_tuple(self):
        return (self.x, self.y)


Vec2.ZERO = Vec2(0.0, 0.0)
Vec2.ONE = Vec2(1.0, 1.0)


@dataclass(frozen=True)
class Rect:
    """Axis-aligned rectangle stored as origin + size.

    In curve space the origin is the minimum corner (Y-up). Screen rectangles
    use the same layout with the origin at the top-left (Y-down).
    """
    x: float = 0.0
    y: float = 0.0
    width: float = 1.0
    height: float = 1.0

    @classmethod
    def from_min_max(cls, min_corner, max_corner) -> 'Rect':
        return cls(min_corner.x, min_corner.y,
                   max_corner.x - min_corner.x, max_corner.y - min_corner.y)

    @classmethod
    def of(cls, value) -> 'Rect':
        """Coerce a Rect or an (x, y, width, height) tuple"""
        if isinstance(value, Rect):
            return value
        x, y, width, height = value
        return cls(float(x), float(y), float(width), float(height))

    @property
    def x_min(self) -> float:
        return self.x

    @property
    def x_max(self) -> float:
        return self.x + self.width

    @property
    def y_min(self) -> float:
        return self.y

    @property
    def y_max(self) -> float:
        return self.y + self.height

    @property
    def min(self) -> Vec2:
        return Vec2(self.x, self.y)

    @property
    def max(self) -> Vec2:
        return Vec2(self.x_max, self.y_max)

    @property
    def size(self) -> Vec2:
        return Vec2(self.width, self.height)

    @property
    def center(self) -> Vec2:
        return Vec2(self.x + self.width * 0.5, self.y + self.height * 0.5)

    def contains(self, point) -> bool:
        return self.x_min <= point.x <= self.x_max and self.y_min <= point.y <= self.y_max

    def to_tuple(self):
        return (self.x, self.y, self.width, self.height)
