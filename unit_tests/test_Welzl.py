import logging
import sys

import numpy as np
import pytest
from scipy.optimize import nnls
from pyminiball.Ball import Ball
from pyminiball.Circumsphere import circumscribed
from pyminiball.Welzl import MinimumEnclosingBall, enclosing, resolve_rng
from pyminiball.errors import (
    DegenerateInputError,
    DimensionMismatchError,
    EmptyInputError,
)

EPSILON = np.sqrt(np.finfo(float).eps)


def boundary_points(points, ball, epsilon=EPSILON):
    dist = np.linalg.norm(points - ball.center, axis=1)
    return points[np.abs(dist - ball.radius) <= epsilon * max(1.0, ball.radius)]


def assert_minimum_ball(points, ball):
    """Check containment plus the optimality certificate: the center is a
    convex combination of the boundary points."""
    points = np.asarray(points, dtype=float)
    dist = np.linalg.norm(points - ball.center, axis=1)
    assert np.all(dist <= ball.radius + EPSILON * max(1.0, ball.radius))
    support = boundary_points(points, ball)
    assert len(support) >= 1
    A = np.vstack([support.T, np.ones(len(support))])
    b = np.append(ball.center, 1.0)
    _, residual = nnls(A, b)
    assert residual <= 1e-6 * max(1.0, ball.radius)


# ---------------------------------------------------------------------------
# scenarios
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("method", ["recursive", "iterative"])
def test_right_triangle(method):
    points = [[0, 0], [4, 0], [0, 3]]
    ball = enclosing(points, seed=0, method=method)
    assert np.allclose(ball.center, [2.0, 1.5])
    assert np.isclose(ball.radius, 2.5)
    other = circumscribed(points)
    assert np.allclose(ball.center, other.center)
    assert np.isclose(ball.radius_squared, other.radius_squared)


@pytest.mark.parametrize("method", ["recursive", "iterative"])
def test_two_points(method):
    ball = enclosing([[0, 0], [2, 0]], seed=0, method=method)
    assert np.allclose(ball.center, [1.0, 0.0])
    assert np.isclose(ball.radius, 1.0)


@pytest.mark.parametrize("method", ["recursive", "iterative"])
def test_single_point(method):
    ball = enclosing([[5, 5]], seed=0, method=method)
    assert np.allclose(ball.center, [5.0, 5.0])
    assert ball.radius_squared == 0.0


def test_zero_dimensional_point():
    ball = enclosing(np.zeros((1, 0)))
    assert ball.dim == 0
    assert ball.radius_squared == 0.0


def test_empty_input():
    with pytest.raises(EmptyInputError):
        enclosing([])
    with pytest.raises(EmptyInputError):
        enclosing(np.empty((0, 3)))


def test_dimension_mismatch():
    with pytest.raises(DimensionMismatchError):
        enclosing([[0.0, 0.0], [1.0, 1.0, 1.0]])


def test_invalid_method():
    with pytest.raises(ValueError):
        enclosing([[0.0, 0.0]], method="bogus")


# ---------------------------------------------------------------------------
# enclosing sets of bounds
# ---------------------------------------------------------------------------


def test_1_ball_enclosing_bounds():
    points = np.array([[1.0], [-1.0]]) * 3.0 + 7.0
    ball = enclosing(points, seed=1)
    assert np.allclose(ball.center, [7.0])
    assert np.isclose(ball.radius_squared, 9.0)


def test_2_ball_enclosing_bounds():
    offset = np.array([-3.0, 7.0])
    points = np.array([[-1.0, 0.0], [1.0, 0.0], [0.0, 1.0]]) * 3.0 + offset
    ball = enclosing(points, seed=2)
    assert np.allclose(ball.center, offset)
    assert np.isclose(ball.radius_squared, 9.0)


def test_3_ball_enclosing_bounds():
    offset = np.array([-3.0, 7.0, 4.8])
    points = np.array([
        [1.0, 1.0, 1.0],
        [1.0, -1.0, -1.0],
        [-1.0, 1.0, -1.0],
        [-1.0, -1.0, 1.0],
    ]) + offset
    ball = enclosing(points, seed=3)
    assert np.allclose(ball.center, offset)
    assert np.isclose(ball.radius_squared, 3.0)


@pytest.mark.parametrize("seed", range(10))
def test_3_ball_enclosing_3_line(seed):
    offset = np.array([-3.0, 7.0, 4.8])
    points = np.array([
        [-1.0, 0.0, 0.0],
        [-0.5, 0.0, 0.0],
        [0.5, 0.0, 0.0],
        [1.0, 0.0, 0.0],
    ]) * 3.0 + offset
    ball = enclosing(points, seed=seed)
    assert np.allclose(ball.center, offset)
    assert np.isclose(ball.radius_squared, 9.0)


@pytest.mark.parametrize("seed", range(5))
def test_co_circular_square(seed):
    points = [[0, 0], [1, 0], [0, 1], [1, 1]]
    ball = enclosing(points, seed=seed)
    assert np.allclose(ball.center, [0.5, 0.5])
    assert np.isclose(ball.radius_squared, 0.5)


def test_duplicate_points():
    points = [[1.0, 1.0]] * 5 + [[3.0, 1.0]] * 3
    ball = enclosing(points, seed=0)
    assert np.allclose(ball.center, [2.0, 1.0])
    assert np.isclose(ball.radius, 1.0)


def test_interior_points_do_not_matter():
    rng = np.random.default_rng(11)
    hull = np.array([[-1.0, 0.0], [1.0, 0.0], [0.0, 1.0], [0.0, -1.0]])
    interior = rng.uniform(-0.5, 0.5, size=(200, 2))
    ball = enclosing(np.vstack([interior, hull]), seed=5)
    assert np.allclose(ball.center, [0.0, 0.0], atol=1e-9)
    assert np.isclose(ball.radius, 1.0)


# ---------------------------------------------------------------------------
# properties
# ---------------------------------------------------------------------------


@pytest.mark.parametrize("dim, count", [(2, 400), (3, 400), (4, 300), (6, 150)])
@pytest.mark.parametrize("method", ["recursive", "iterative"])
def test_random_cube_containment_and_minimality(dim, count, method):
    rng = np.random.default_rng(dim)
    offset = rng.normal(size=dim) * 5.0
    points = (rng.random((count, dim)) - 0.5) * 3.0 + offset
    ball = enclosing(points, rng=rng, method=method)
    assert_minimum_ball(points, ball)
    assert len(boundary_points(points, ball)) >= 2
    assert np.all(np.abs(ball.center - offset) < 1.0)


def test_normal_cloud_minimality():
    rng = np.random.default_rng(0)
    points = rng.normal(size=(1000, 3))
    ball = enclosing(points, seed=0)
    assert_minimum_ball(points, ball)


def test_points_on_sphere():
    rng = np.random.default_rng(8)
    center = np.array([-3.0, 7.0, 4.8])
    directions = rng.normal(size=(500, 3))
    directions /= np.linalg.norm(directions, axis=1)[:, None]
    points = directions * 3.0 + center
    ball = enclosing(points, seed=8)
    assert np.all(np.abs(ball.center - center) < 0.1)
    assert ball.radius <= 3.0 + 1e-9
    assert ball.radius > 2.9
    assert_minimum_ball(points, ball)


def test_determinism_given_seed():
    points = np.random.default_rng(4).normal(size=(300, 4))
    a = enclosing(points, seed=123)
    b = enclosing(points, seed=123)
    assert a == b


def test_determinism_given_generator():
    points = np.random.default_rng(4).normal(size=(300, 4))
    a = enclosing(points, rng=np.random.default_rng(9))
    b = enclosing(points, rng=np.random.default_rng(9))
    assert a == b


@pytest.mark.parametrize("seed", range(3))
def test_recursive_and_iterative_agree(seed):
    points = np.random.default_rng(seed).normal(size=(500, 3))
    a = enclosing(points, seed=seed, method="recursive")
    b = enclosing(points, seed=seed, method="iterative")
    assert a == b


@pytest.mark.parametrize("seed", range(5))
def test_permutation_invariance(seed):
    rng = np.random.default_rng(seed)
    points = rng.normal(size=(200, 3))
    shuffled = points[rng.permutation(len(points))]
    a = enclosing(points, seed=0)
    b = enclosing(shuffled, seed=seed + 1)
    assert np.allclose(a.center, b.center, atol=1e-8)
    assert np.isclose(a.radius_squared, b.radius_squared, rtol=1e-8)


def test_input_is_not_mutated():
    points = np.random.default_rng(2).normal(size=(50, 2))
    before = points.copy()
    enclosing(points, seed=0)
    assert np.array_equal(points, before)


def test_deep_recursion():
    points = np.random.default_rng(6).normal(size=(5000, 2))
    a = enclosing(points, seed=6, method="recursive")
    b = enclosing(points, seed=6, method="iterative")
    assert a == b
    assert_minimum_ball(points, a)


@pytest.mark.parametrize("method", ["recursive", "iterative"])
def test_degenerate_support_aborts_enclosing(method):
    # acute triangle: the minimum ball needs all three points as support,
    # and their edge matrix fails a cut-off of 0.9
    points = [[0.0, 0.0], [2.0, 0.0], [1.0, 1.7]]
    limit = sys.getrecursionlimit()
    with pytest.raises(DegenerateInputError):
        enclosing(points, seed=0, rcond=0.9, method=method)
    assert sys.getrecursionlimit() == limit


def test_debug_logging(caplog):
    with caplog.at_level(logging.DEBUG, logger="pyminiball.Welzl"):
        enclosing([[0.0, 0.0], [2.0, 0.0]], seed=0)
    assert any("Enclosed 2 points in 2 dimensions" in r.getMessage() for r in caplog.records)


def test_resolve_rng():
    assert isinstance(resolve_rng(), np.random.Generator)
    gen = np.random.default_rng(0)
    assert resolve_rng(rng=gen) is gen
    with pytest.raises(ValueError):
        resolve_rng(seed=1, rng=gen)
    with pytest.raises(TypeError):
        resolve_rng(rng=np.random.RandomState(0))


# ---------------------------------------------------------------------------
# MinimumEnclosingBall
# ---------------------------------------------------------------------------


def test_minimum_enclosing_ball_matches_enclosing():
    points = np.random.default_rng(1).normal(size=(300, 3))
    meb = MinimumEnclosingBall(points, seed=1)
    ball = enclosing(points, seed=2)
    assert isinstance(meb.ball, Ball)
    assert meb.dim == 3
    assert np.allclose(meb.ball.center, ball.center, atol=1e-8)
    assert np.isclose(meb.ball.radius_squared, ball.radius_squared)
    assert sorted(meb.order) == list(range(len(points)))


def test_minimum_enclosing_ball_recompute_reuses_order():
    points = np.random.default_rng(5).normal(size=(300, 4))
    meb = MinimumEnclosingBall(points, seed=5, method="iterative")
    first = meb.ball
    for _ in range(3):
        again = meb.recompute()
        assert np.allclose(again.center, first.center, atol=1e-8)
        assert np.isclose(again.radius_squared, first.radius_squared)
        assert sorted(meb.order) == list(range(len(points)))


def test_minimum_enclosing_ball_add_points():
    meb = MinimumEnclosingBall([[0, 0], [2, 0]], seed=0)
    assert np.isclose(meb.ball.radius, 1.0)
    # enclosed point leaves the ball unchanged
    ball = meb.add_points([[1.0, 0.5]])
    assert np.allclose(ball.center, [1.0, 0.0])
    assert np.isclose(ball.radius, 1.0)
    # outside point grows it
    ball = meb.add_points([[1.0, 4.0]])
    assert ball.radius > 1.0
    assert_minimum_ball(meb.points, ball)
    assert len(meb.points) == 4
    assert sorted(meb.order) == [0, 1, 2, 3]


def test_minimum_enclosing_ball_add_points_matches_fresh_run():
    rng = np.random.default_rng(12)
    first = rng.normal(size=(200, 3))
    second = rng.normal(size=(200, 3)) * 2.0
    meb = MinimumEnclosingBall(first, seed=0)
    meb.add_points(second)
    fresh = enclosing(np.vstack([first, second]), seed=1)
    assert np.allclose(meb.ball.center, fresh.center, atol=1e-8)
    assert np.isclose(meb.ball.radius_squared, fresh.radius_squared)


def test_minimum_enclosing_ball_failed_add_points_keeps_state():
    meb = MinimumEnclosingBall([[0.0, 0.0], [2.0, 0.0]], seed=0, rcond=0.9)
    before = meb.ball
    order = meb.order
    with pytest.raises(DegenerateInputError):
        meb.add_points([[1.0, 5.0], [1.0, -5.0]])
    assert len(meb.points) == 2
    assert meb.order == order
    assert meb.ball is before
    assert meb.recompute() == before


def test_minimum_enclosing_ball_add_nothing_and_mismatch():
    meb = MinimumEnclosingBall([[0.0, 0.0], [2.0, 0.0]], seed=0)
    before = meb.ball
    assert meb.add_points(np.empty((0, 2))) is before
    with pytest.raises(DimensionMismatchError):
        meb.add_points([[1.0, 1.0, 1.0]])


def test_minimum_enclosing_ball_support_points():
    meb = MinimumEnclosingBall([[0, 0], [4, 0], [0, 3], [1, 1]], seed=0)
    support = meb.support_points()
    assert len(support) == 3
    assert not any(np.allclose(p, [1, 1]) for p in support)


def test_minimum_enclosing_ball_rejects_bad_input():
    with pytest.raises(EmptyInputError):
        MinimumEnclosingBall([])
    with pytest.raises(ValueError):
        MinimumEnclosingBall([[0.0]], method="bogus")
