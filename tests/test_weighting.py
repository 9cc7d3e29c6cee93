import itertools

import numpy as np
import pytest

from holefill.core.grid import Point
from holefill.core.weighting import (
    CallableWeighting,
    DefaultWeightingFunction,
    WeightingFunction,
    as_weighting_function,
)

COORDS = [(0, 0), (1, 0), (0, 3), (4, 4), (7, 2), (2, 9)]


def test_default_parameters():
    w = DefaultWeightingFunction()
    assert w.z == 3
    assert w.epsilon == 0.01


def test_default_formula():
    w = DefaultWeightingFunction()
    u = Point(0, 0, -1)
    assert w(u, Point(0, 0, 0.5)) == pytest.approx(100.0)
    assert w(u, Point(1, 0, 0.5)) == pytest.approx(1 / 1.01)
    assert w(u, Point(3, 4, 0.5)) == pytest.approx(1 / (125 + 0.01))


def test_default_is_symmetric():
    w = DefaultWeightingFunction()
    for (ax, ay), (bx, by) in itertools.product(COORDS, repeat=2):
        a, b = Point(ax, ay, 0.5), Point(bx, by, 0.5)
        assert w(a, b) == w(b, a)


def test_default_decreases_with_distance():
    w = DefaultWeightingFunction()
    u = Point(0, 0, -1)
    weights = [w(u, Point(d, 0, 0.5)) for d in range(6)]
    assert all(a > b for a, b in zip(weights, weights[1:]))
    assert w(u, Point(1, 1, 0.5)) > w(u, Point(2, 0, 0.5))


def test_default_ignores_intensity():
    w = DefaultWeightingFunction()
    assert w(Point(0, 0, -1), Point(2, 1, 0.0)) == w(Point(0, 0, 0.7), Point(2, 1, 1.0))


def test_vectorised_weights_match_scalar():
    w = DefaultWeightingFunction(z=2, epsilon=0.5)
    u = Point(3, 3, -1)
    points = [Point(x, y, 0.5) for x, y in COORDS]
    expected = [w(u, v) for v in points]
    np.testing.assert_allclose(w.weights(u, points), expected)
    np.testing.assert_allclose(w.weights(u, points, np.array(COORDS, dtype=np.float64)), expected)


@pytest.mark.parametrize("z, epsilon", [(0, 0.01), (-1, 0.01), (3, 0), (3, -0.1)])
def test_invalid_parameters(z, epsilon):
    with pytest.raises(ValueError):
        DefaultWeightingFunction(z=z, epsilon=epsilon)


def test_callable_weighting_uses_base_batch():
    fn = CallableWeighting(lambda u, v: 1.0 + abs(u.x - v.x))
    u = Point(1, 0, -1)
    points = [Point(1, 0, 0.1), Point(3, 2, 0.2), Point(0, 5, 0.3)]
    np.testing.assert_allclose(fn.weights(u, points), [1.0, 3.0, 2.0])


def test_batch_weights_receive_boundary_points():
    seen = []

    def by_intensity(u, v):
        seen.append(v)
        return 1.0 + v.intensity

    points = [Point(2, 0, 0.25), Point(0, 4, 0.75)]
    weights = CallableWeighting(by_intensity).weights(Point(1, 1, -1), points)
    np.testing.assert_allclose(weights, [1.25, 1.75])
    assert all(isinstance(v, Point) for v in seen)
    assert seen == points


def test_as_weighting_function():
    default = DefaultWeightingFunction()
    assert as_weighting_function(default) is default
    assert isinstance(as_weighting_function(None), DefaultWeightingFunction)
    wrapped = as_weighting_function(lambda u, v: 1.0)
    assert isinstance(wrapped, WeightingFunction)
    assert wrapped(Point(0, 0, -1), Point(1, 1, 0.2)) == 1.0
    with pytest.raises(TypeError):
        as_weighting_function(3.0)


def test_weighting_function_is_abstract():
    with pytest.raises(TypeError):
        WeightingFunction()
