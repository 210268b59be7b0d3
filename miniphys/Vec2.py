import math


class Vec2:
    """Immutable 2D vector used for positions, offsets and accelerations."""

    __slots__ = ("_x", "_y")

    def __init__(self, x, y):
        object.__setattr__(self, "_x", float(x))
        object.__setattr__(self, "_y", float(y))

    @classmethod
    def zero(cls):
        return cls(0.0, 0.0)

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    def __add__(self, other):
        return Vec2(self._x + other.x, self._y + other.y)

    def __sub__(self, other):
        return Vec2(self._x - other.x, self._y - other.y)

    def __mul__(self, scalar):
        return Vec2(self._x * scalar, self._y * scalar)

    def __rmul__(self, scalar):
        return self.__mul__(scalar)

    def __truediv__(self, scalar):
        return Vec2(self._x / scalar, self._y / scalar)

    def __neg__(self):
        return Vec2(-self._x, -self._y)

    def __iter__(self):
        yield self._x
        yield self._y

    def dot(self, other):
        return self._x * other.x + self._y * other.y

    def length(self):
        return math.hypot(self._x, self._y)

    def length_sq(self):
        return self._x * self._x + self._y * self._y

    def distance_to(self, other):
        return math.hypot(self._x - other.x, self._y - other.y)

    def normalize(self):
        l = self.length()
        if l > 0.0:
            return Vec2(self._x / l, self._y / l)
        return Vec2(0.0, 0.0)

    def to_tuple(self):
        return (self._x, self._y)

    def __eq__(self, other):
        if other is None or not isinstance(other, Vec2):
            return False
        return self._x == other.x and self._y == other.y

    def __hash__(self):
        return hash((self._x, self._y))

    def __repr__(self):
        return f"Vec2({self._x:.3f}, {self._y:.3f})"
