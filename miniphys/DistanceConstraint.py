from enum import Enum


class ConstraintKind(Enum):
    STRUCTURAL = "structural"
    SHEAR = "shear"
    BEND = "bend"


class DistanceConstraint:
    """Undirected rest-length link between two particle indices.

    Endpoints are indices into the owning cloth's particle list, so the
    constraint never holds a reference to a particle.
    """

    __slots__ = ("_p1_idx", "_p2_idx", "_distance", "_kind")

    def __init__(self, p1_idx, p2_idx, distance, kind=ConstraintKind.STRUCTURAL):
        object.__setattr__(self, "_p1_idx", int(p1_idx))
        object.__setattr__(self, "_p2_idx", int(p2_idx))
        object.__setattr__(self, "_distance", float(distance))
        object.__setattr__(self, "_kind", ConstraintKind(kind))

    def __setattr__(self, name, value):
        raise AttributeError(f"{self.__class__.__name__} is immutable")

    @property
    def p1_idx(self):
        return self._p1_idx

    @property
    def p2_idx(self):
        return self._p2_idx

    @property
    def distance(self):
        return self._distance

    @property
    def kind(self):
        return self._kind

    def particles(self):
        return (self._p1_idx, self._p2_idx)

    def involves(self, index):
        return self._p1_idx == index or self._p2_idx == index

    def solve(self, particles, eps=1e-9):
        """One relaxation pass: pull both endpoints toward the rest length.

        Each free endpoint takes half of the length error; a pinned endpoint
        is skipped and never moves.
        """
        p1 = particles[self._p1_idx]
        p2 = particles[self._p2_idx]
        if p1.pinned and p2.pinned:
            return

        d = p2.pos - p1.pos
        len_d = d.length()
        if len_d < eps:
            return
        correction = (d / len_d) * ((len_d - self._distance) * 0.5)
        if not p1.pinned:
            p1.pos = p1.pos + correction
        if not p2.pinned:
            p2.pos = p2.pos - correction

    def __eq__(self, other):
        if not isinstance(other, DistanceConstraint):
            return NotImplemented
        return (self._p1_idx, self._p2_idx, self._distance, self._kind) == \
            (other.p1_idx, other.p2_idx, other.distance, other.kind)

    def __hash__(self):
        return hash((self._p1_idx, self._p2_idx, self._distance, self._kind))

    def __repr__(self):
        return (f"<{self.__class__.__name__} {self._kind.value} "
                f"p1={self._p1_idx} p2={self._p2_idx} distance={self._distance:.3f}>")

    def __str__(self):
        return self.__repr__()
