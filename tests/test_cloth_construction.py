import math
from collections import Counter

import numpy as np
import pytest

from miniphys.cloth import Cloth
from miniphys.DistanceConstraint import ConstraintKind
from miniphys.Vec2 import Vec2


def expected_constraint_count(w, h):
    structural = h * (w - 1) + w * (h - 1)
    shear = 2 * (w - 1) * (h - 1)
    bend = h * max(w - 2, 0) + w * max(h - 2, 0)
    return structural + shear + bend


def test_three_by_three_grid():
    cloth = Cloth(3, 3, 10.0)
    assert len(cloth.particles) == 9
    assert len(cloth.constraints) == 26
    kinds = Counter(c.kind for c in cloth.constraints)
    assert kinds[ConstraintKind.STRUCTURAL] == 12
    assert kinds[ConstraintKind.SHEAR] == 8
    assert kinds[ConstraintKind.BEND] == 6


@pytest.mark.parametrize("w,h,count", [
    (1, 1, 0),
    (2, 1, 1),
    (1, 5, 7),
    (2, 2, 6),
    (4, 3, 39),
    (10, 10, 502),
])
def test_constraint_count_formula(w, h, count):
    cloth = Cloth(w, h, 1.0)
    assert len(cloth.particles) == w * h
    assert len(cloth.constraints) == count == expected_constraint_count(w, h)


def test_particles_laid_out_on_grid():
    cloth = Cloth(4, 3, 5.0)
    for y in range(3):
        for x in range(4):
            p = cloth.particles[y * 4 + x]
            assert p.pos == Vec2(x * 5.0, y * 5.0)
            assert p.old_pos == p.pos
            assert p.pinned == (y == 0)


def test_origin_offsets_grid():
    cloth = Cloth(2, 2, 5.0, origin=Vec2(100, 50))
    assert cloth.particles[0].pos == Vec2(100, 50)
    assert cloth.particles[3].pos == Vec2(105, 55)


def test_rest_lengths_by_kind():
    cloth = Cloth(5, 5, 3.0)
    for c in cloth.constraints:
        if c.kind is ConstraintKind.STRUCTURAL:
            assert c.distance == 3.0
        elif c.kind is ConstraintKind.SHEAR:
            assert c.distance == pytest.approx(3.0 * math.sqrt(2.0))
        else:
            assert c.distance == 6.0


def test_constraints_start_at_rest():
    cloth = Cloth(6, 4, 7.5)
    assert np.allclose(cloth.strain(), 1.0)


def test_all_constraint_indices_valid_and_distinct():
    cloth = Cloth(7, 5, 1.0)
    edges = cloth.edges()
    assert edges.shape == (len(cloth.constraints), 2)
    assert edges.min() >= 0
    assert edges.max() < len(cloth.particles)
    assert np.all(edges[:, 0] != edges[:, 1])
    pairs = {tuple(sorted(e)) for e in edges.tolist()}
    assert len(pairs) == len(edges)


def test_construction_is_deterministic():
    a = Cloth(5, 4, 2.0)
    b = Cloth(5, 4, 2.0)
    assert a.constraints == b.constraints
    assert np.array_equal(a.positions(), b.positions())


def test_top_row_pinned():
    cloth = Cloth(6, 3, 1.0)
    mask = cloth.pinned_mask()
    assert mask[:6].all()
    assert not mask[6:].any()


@pytest.mark.parametrize("args", [
    (0, 3, 1.0),
    (3, 0, 1.0),
    (-1, 3, 1.0),
    (3, 3, 0.0),
    (3, 3, -2.0),
    (3, 3, float("nan")),
    (2.5, 3, 1.0),
    (True, 3, 1.0),
    ("3", 3, 1.0),
    (np.int64(0), 3, 1.0),
])
def test_invalid_dimensions_rejected(args):
    with pytest.raises(ValueError):
        Cloth(*args)


def test_numpy_integer_dimensions_accepted():
    cloth = Cloth(np.int64(3), np.int32(3), 10.0)
    assert cloth.width == 3
    assert type(cloth.width) is int
    assert len(cloth.particles) == 9
    assert len(cloth.constraints) == 26


def test_views_are_snapshots():
    cloth = Cloth(3, 3, 1.0)
    constraints = cloth.constraints
    cloth.remove_constraint(0)
    assert len(constraints) == 26
    assert len(cloth.constraints) == 25
    assert isinstance(cloth.particles, tuple)
    assert cloth.positions().shape == (9, 2)


def test_dimensions_exposed():
    cloth = Cloth(4, 2, 2.5)
    assert (cloth.width, cloth.height, cloth.spacing) == (4, 2, 2.5)
    assert "4x2" in repr(cloth)
