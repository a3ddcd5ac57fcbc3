import random

import numpy as np
import pytest

from vuengine.gameobject import GameObject
from vuengine.systems import PALETTE, ColorSystem, GravityPhysicsSystem


def _objects(n):
    return [GameObject.create() for _ in range(n)]


def test_color_system_waits_for_flicker():
    objs = _objects(3)
    system = ColorSystem(0.5, random.Random(1))
    system.update(0.2, objs)
    assert all(np.allclose(o.color, [0.0, 0.0, 0.0]) for o in objs)


def test_color_system_picks_palette_colors():
    objs = _objects(5)
    system = ColorSystem(0.5, random.Random(1))
    system.update(0.6, objs)
    palette = [np.array(c) for c in PALETTE]
    for obj in objs:
        assert any(np.allclose(obj.color, c) for c in palette)


def test_color_system_is_deterministic_with_seed():
    a, b = _objects(4), _objects(4)
    ColorSystem(0.1, random.Random(7)).update(1.0, a)
    ColorSystem(0.1, random.Random(7)).update(1.0, b)
    assert all(np.allclose(x.color, y.color) for x, y in zip(a, b))


def test_color_system_resets_timer():
    objs = _objects(2)
    system = ColorSystem(0.5, random.Random(3))
    system.update(0.6, objs)
    for obj in objs:
        obj.color = np.array([9.0, 9.0, 9.0])
    system.update(0.1, objs)
    assert all(np.allclose(o.color, [9.0, 9.0, 9.0]) for o in objs)


def test_compute_force_zero_when_coincident():
    a, b = _objects(2)
    assert np.allclose(GravityPhysicsSystem(1.0).compute_force(a, b), [0.0, 0.0])


def test_compute_force_antisymmetric_and_along_offset():
    a, b = _objects(2)
    a.transform.translation[:2] = (1.0, 2.0)
    b.transform.translation[:2] = (-1.0, 0.5)
    system = GravityPhysicsSystem(2.0)
    f_ab = system.compute_force(a, b)
    assert np.allclose(f_ab, -system.compute_force(b, a))
    offset = np.array([2.0, 1.5])
    assert np.isclose(f_ab[0] * offset[1] - f_ab[1] * offset[0], 0.0)
    assert np.dot(f_ab, offset) > 0


def test_compute_force_inverse_square():
    a, b, c = _objects(3)
    b.transform.translation[0] = 1.0
    c.transform.translation[0] = 2.0
    system = GravityPhysicsSystem(1.0)
    near = np.linalg.norm(system.compute_force(b, a))
    far = np.linalg.norm(system.compute_force(c, a))
    assert near == pytest.approx(4 * far)


def test_compute_force_scales_with_masses():
    a, b = _objects(2)
    b.transform.translation[0] = 3.0
    system = GravityPhysicsSystem(1.0)
    base = np.linalg.norm(system.compute_force(a, b))
    a.rigid_body.mass = 5.0
    assert np.linalg.norm(system.compute_force(a, b)) == pytest.approx(5 * base)


def test_update_attracts_and_conserves_momentum():
    a, b = _objects(2)
    a.transform.translation[:2] = (-1.0, 0.0)
    b.transform.translation[:2] = (1.0, 0.0)
    a.rigid_body.mass = 2.0
    b.rigid_body.mass = 3.0
    system = GravityPhysicsSystem(0.5)
    system.update([a, b], 0.1, substeps=5)
    gap = np.linalg.norm(a.transform.translation - b.transform.translation)
    assert gap < 2.0
    momentum = a.rigid_body.mass * a.rigid_body.velocity + b.rigid_body.mass * b.rigid_body.velocity
    assert np.allclose(momentum, [0.0, 0.0])
    assert a.rigid_body.velocity[0] > 0 > b.rigid_body.velocity[0]


def test_update_moves_free_body_by_velocity():
    (obj,) = _objects(1)
    obj.rigid_body.velocity[:] = (1.0, -2.0)
    GravityPhysicsSystem(1.0).update([obj], 0.5, substeps=2)
    assert np.allclose(obj.transform.translation, [0.5, -1.0, 0.0])


def test_update_rejects_zero_substeps():
    with pytest.raises(ValueError):
        GravityPhysicsSystem(1.0).update(_objects(2), 0.1, substeps=0)