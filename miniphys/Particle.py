from .Vec2 import Vec2


class Particle:
    """Point mass integrated with position Verlet.

    Velocity is never stored: it is the difference between ``pos`` and
    ``old_pos``. ``old_pos`` only changes inside ``update`` and ``set_position``.
    """

    def __init__(self, pos, mass=1.0, pinned=False):
        self.pos = pos if isinstance(pos, Vec2) else Vec2(pos[0], pos[1])
        self.old_pos = self.pos
        self.acceleration = Vec2(0.0, 0.0)

        # Internal state for properties
        self._mass = 1.0
        self._pinned = False

        # Use setters to validate mass and coerce the pin flag
        self.mass = mass
        self.pinned = pinned

    @property
    def mass(self):
        return self._mass

    @mass.setter
    def mass(self, value):
        value = float(value)
        if value <= 0.0:
            raise ValueError(f"particle mass must be positive, got {value}")
        self._mass = value

    @property
    def pinned(self):
        return self._pinned

    @pinned.setter
    def pinned(self, value):
        self._pinned = bool(value)

    def apply_force(self, force):
        self.acceleration = self.acceleration + force / self._mass

    def update(self, dt, damping=1.0):
        if self._pinned:
            # anchors advance in lockstep so they carry no implicit velocity
            self.old_pos = self.pos
            return
        new_pos = self.pos + (self.pos - self.old_pos) * damping + self.acceleration * (dt * dt)
        self.old_pos = self.pos
        self.pos = new_pos

    def set_position(self, pos):
        """Teleport the particle, discarding its implicit velocity and pending forces."""
        self.pos = pos
        self.old_pos = pos
        self.acceleration = Vec2(0.0, 0.0)

    def reset_acceleration(self):
        self.acceleration = Vec2(0.0, 0.0)

    def __repr__(self):
        return f"Particle(pos=({self.pos.x:.2f}, {self.pos.y:.2f}), mass={self.mass}, pinned={self.pinned})"

    def __str__(self):
        return self.__repr__()

    def to_dict(self):
        return {
            'pos': self.pos.to_tuple(),
            'old_pos': self.old_pos.to_tuple(),
            'mass': self.mass,
            'pinned': self.pinned
        }
