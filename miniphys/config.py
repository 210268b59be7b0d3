"""
Cloth physics configuration.

The physical constants that drive a :class:`~miniphys.cloth.Cloth` live here
instead of at module level, so every cloth can be built and tested with
injected values.
"""
from dataclasses import dataclass, field, replace
from typing import Any, Mapping

from .Vec2 import Vec2

GRAVITY = 987.0


@dataclass(frozen=True)
class ClothConfig:
    """Tunable parameters for a cloth simulation.

    Attributes:
        gravity: Acceleration applied to every unpinned particle (units/s^2).
        damping: Multiplier on the Verlet velocity term, in [0, 1]. 1.0 keeps
            all momentum, lower values bleed energy each step.
        constraint_iterations: Relaxation passes per step (>= 1).
        cut_threshold: A cut only happens if the nearest particle is closer
            than this.
        tear_factor: Constraints stretched to ``distance * tear_factor`` or
            more are removed after relaxation. 0 disables tearing; otherwise it
            must exceed 1, since a link at rest already has a ratio of 1.
    """
    gravity: Vec2 = field(default_factory=lambda: Vec2(0.0, GRAVITY))
    damping: float = 0.99
    constraint_iterations: int = 2
    cut_threshold: float = 10.0
    tear_factor: float = 0.0

    def __post_init__(self):
        if not isinstance(self.gravity, Vec2):
            object.__setattr__(self, "gravity", Vec2(*self.gravity))
        if int(self.constraint_iterations) < 1:
            raise ValueError(f"constraint_iterations must be >= 1, got {self.constraint_iterations}")
        if not 0.0 <= float(self.damping) <= 1.0:
            raise ValueError(f"damping must be within [0, 1], got {self.damping}")
        if float(self.cut_threshold) < 0.0:
            raise ValueError(f"cut_threshold must be >= 0, got {self.cut_threshold}")
        tear_factor = float(self.tear_factor)
        if tear_factor != 0.0 and not tear_factor > 1.0:
            raise ValueError(f"tear_factor must be 0 (off) or greater than 1, got {self.tear_factor}")
        object.__setattr__(self, "constraint_iterations", int(self.constraint_iterations))
        object.__setattr__(self, "damping", float(self.damping))
        object.__setattr__(self, "cut_threshold", float(self.cut_threshold))
        object.__setattr__(self, "tear_factor", float(self.tear_factor))

    def replace(self, **changes: Any) -> "ClothConfig":
        return replace(self, **changes)

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any], base: "ClothConfig" = None) -> "ClothConfig":
        """Build a config from a flat mapping such as the GUI's shared dict.

        Only ``gravity_y``, ``damping``, ``constraint_iterations`` and
        ``tear_factor`` are read; other keys are ignored.
        Missing keys keep the value from ``base`` (or the defaults).
        """
        base = base if base is not None else cls()
        changes = {}
        if mapping.get('gravity_y') is not None:
            changes['gravity'] = Vec2(base.gravity.x, float(mapping['gravity_y']))
        for key in ('damping', 'constraint_iterations', 'tear_factor'):
            if mapping.get(key) is not None:
                changes[key] = mapping[key]
        return replace(base, **changes)
