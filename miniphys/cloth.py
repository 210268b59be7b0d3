import logging
import math
import operator
from collections import namedtuple
from datetime import timedelta

import numpy as np

from .config import ClothConfig
from .DistanceConstraint import ConstraintKind, DistanceConstraint
from .Particle import Particle
from .Vec2 import Vec2

logger = logging.getLogger(__name__)

# A dragged particle and its offset from the pointer at selection time.
Selection = namedtuple("Selection", ["index", "offset"])


def _as_vec2(value):
    return value if isinstance(value, Vec2) else Vec2(value[0], value[1])


def _grid_dimension(name, value):
    if isinstance(value, bool):
        raise ValueError(f"cloth {name} must be an int >= 1, got {value!r}")
    try:
        value = operator.index(value)
    except TypeError:
        raise ValueError(f"cloth {name} must be an int >= 1, got {value!r}") from None
    if value < 1:
        raise ValueError(f"cloth {name} must be an int >= 1, got {value!r}")
    return value


def _seconds(delta_time):
    if isinstance(delta_time, timedelta):
        return delta_time.total_seconds()
    return float(delta_time)


class Cloth:
    def __init__(self, width, height, spacing, config=None, origin=None):
        """
        A regular grid of Verlet particles held together by distance constraints.

        :param width: Number of particles per row (>= 1).
        :param height: Number of rows (>= 1). The top row is pinned.
        :param spacing: Rest distance between horizontal/vertical neighbours (> 0).
        :param config: ClothConfig with gravity, damping and solver settings.
        :param origin: Vec2 position of the top-left particle.
        """
        width = _grid_dimension("width", width)
        height = _grid_dimension("height", height)
        spacing = float(spacing)
        if not math.isfinite(spacing) or spacing <= 0.0:
            raise ValueError(f"cloth spacing must be a positive number, got {spacing!r}")

        self._width = width
        self._height = height
        self._spacing = spacing
        self._origin = _as_vec2(origin) if origin is not None else Vec2(0.0, 0.0)
        self.config = config if config is not None else ClothConfig()

        self._particles = []
        self._constraints = []
        self._selection = []
        self._build()

    def _build(self):
        self._particles = self._build_particles()
        self._constraints = self._build_constraints()
        self._selection = []
        logger.debug("Built %dx%d cloth: %d particles, %d constraints",
                     self._width, self._height, len(self._particles), len(self._constraints))

    def _build_particles(self):
        particles = []
        for y in range(self._height):
            for x in range(self._width):
                pos = Vec2(self._origin.x + x * self._spacing, self._origin.y + y * self._spacing)
                # pin the top row so the cloth hangs
                particles.append(Particle(pos, pinned=(y == 0)))
        return particles

    def _build_constraints(self):
        constraints = []
        spacing = self._spacing
        diagonal = spacing * math.sqrt(2.0)

        def index_of(x, y):
            if 0 <= x < self._width and 0 <= y < self._height:
                return y * self._width + x
            return None

        links = (
            # Structural constraints (right and below)
            ((1, 0), spacing, ConstraintKind.STRUCTURAL),
            ((0, 1), spacing, ConstraintKind.STRUCTURAL),
            # Shear constraints (diagonals)
            ((1, 1), diagonal, ConstraintKind.SHEAR),
            ((-1, 1), diagonal, ConstraintKind.SHEAR),
            # Bend constraints (skip one particle)
            ((2, 0), spacing * 2.0, ConstraintKind.BEND),
            ((0, 2), spacing * 2.0, ConstraintKind.BEND),
        )
        for y in range(self._height):
            for x in range(self._width):
                i = index_of(x, y)
                for (dx, dy), length, kind in links:
                    j = index_of(x + dx, y + dy)
                    if j is not None:
                        constraints.append(DistanceConstraint(i, j, length, kind))
        return constraints

    def reset(self):
        """Rebuild the initial grid, restoring every cut constraint."""
        self._build()

    def configure(self, **changes):
        self.config = self.config.replace(**changes)
        return self.config

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def simulate(self, delta_time):
        """
        Advance the cloth by one step.

        Forces are accumulated first, then every unpinned particle is
        integrated with damped Verlet, then the constraints are relaxed. The
        constraint set only changes here when tearing is enabled.

        :param delta_time: Step length in seconds, or a timedelta.
        """
        dt = _seconds(delta_time)
        config = self.config

        for p in self._particles:
            if not p.pinned:
                p.apply_force(config.gravity * p.mass)

        for p in self._particles:
            p.update(dt, config.damping)

        for _ in range(config.constraint_iterations):
            for c in self._constraints:
                c.solve(self._particles)

        if config.tear_factor > 0.0:
            self._tear(config.tear_factor)

        for p in self._particles:
            p.reset_acceleration()

    def _tear(self, tear_factor):
        if not self._constraints:
            return
        torn = self.strain() >= tear_factor
        if not torn.any():
            return
        self._constraints = [c for c, broken in zip(self._constraints, torn) if not broken]
        logger.debug("Tore %d constraints", int(torn.sum()))

    # ------------------------------------------------------------------
    # Runtime mutation
    # ------------------------------------------------------------------

    def select(self, pointer, radius):
        """
        Pin and select every particle within ``radius`` of ``pointer``.

        Any previous selection is discarded first (its particles keep their
        current pin state). Returns the number of particles selected.
        """
        pointer = _as_vec2(pointer)
        self._selection = []
        for i, p in enumerate(self._particles):
            if p.pos.distance_to(pointer) <= radius:
                p.pinned = True
                self._selection.append(Selection(i, p.pos - pointer))
        logger.debug("Selected %d particles at %s (radius=%s)", len(self._selection), pointer, radius)
        return len(self._selection)

    def move_selected(self, pointer):
        """Place each selected particle at ``pointer`` plus its recorded offset."""
        pointer = _as_vec2(pointer)
        for index, offset in self._selection:
            self._particles[index].set_position(pointer + offset)

    def clear_selection(self):
        """Unpin the selected particles and forget the selection."""
        for index, _ in self._selection:
            self._particles[index].pinned = False
        self._selection = []

    def nearest_particle(self, position):
        """Return ``(index, distance)`` of the closest particle; ties go to the lower index."""
        position = _as_vec2(position)
        best_index = 0
        best_distance = math.inf
        for i, p in enumerate(self._particles):
            d = p.pos.distance_to(position)
            if d < best_distance:
                best_index = i
                best_distance = d
        return best_index, best_distance

    def cut_at(self, position):
        """
        Disconnect the particle nearest ``position`` if it is within the cut
        threshold. Returns the number of constraints removed.
        """
        index, distance = self.nearest_particle(position)
        if distance < self.config.cut_threshold:
            return self.cut_constraints_at_particle(index)
        return 0

    def cut_constraints_at_particle(self, particle_index):
        removed = self.remove_constraints(lambda c: c.involves(particle_index))
        if removed:
            logger.debug("Cut %d constraints at particle %d", removed, particle_index)
        return removed

    def remove_constraint(self, index):
        if 0 <= index < len(self._constraints):
            del self._constraints[index]
            return True
        return False

    def remove_constraints(self, predicate):
        before = len(self._constraints)
        self._constraints = [c for c in self._constraints if not predicate(c)]
        return before - len(self._constraints)

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    @property
    def width(self):
        return self._width

    @property
    def height(self):
        return self._height

    @property
    def spacing(self):
        return self._spacing

    @property
    def particles(self):
        return tuple(self._particles)

    @property
    def constraints(self):
        return tuple(self._constraints)

    @property
    def selection(self):
        return tuple(self._selection)

    @property
    def selected_particles(self):
        return tuple(s.index for s in self._selection)

    def positions(self):
        return np.array([p.pos.to_tuple() for p in self._particles], dtype=np.float64).reshape(-1, 2)

    def pinned_mask(self):
        return np.fromiter((p.pinned for p in self._particles), dtype=bool, count=len(self._particles))

    def edges(self):
        return np.array([c.particles() for c in self._constraints], dtype=np.int64).reshape(-1, 2)

    def rest_lengths(self):
        return np.fromiter((c.distance for c in self._constraints), dtype=np.float64,
                           count=len(self._constraints))

    def constraint_lengths(self):
        edges = self.edges()
        if len(edges) == 0:
            return np.zeros(0, dtype=np.float64)
        pos = self.positions()
        delta = pos[edges[:, 1]] - pos[edges[:, 0]]
        return np.hypot(delta[:, 0], delta[:, 1])

    def strain(self):
        """Current length over rest length for every constraint."""
        return self.constraint_lengths() / self.rest_lengths()

    def __repr__(self):
        return (f"<{self.__class__.__name__} {self._width}x{self._height} "
                f"particles={len(self._particles)} constraints={len(self._constraints)} "
                f"selected={len(self._selection)}>")
