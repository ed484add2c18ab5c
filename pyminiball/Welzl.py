"""
Welzl module
============

Minimum enclosing ball of a point cloud in **d** dimensions with Welzl's
randomized incremental algorithm and the move-to-front heuristic.

The points are shuffled once. Their indices then live in a working deque.
Each recursion level pops the *back* index and solves the sub-problem over
the rest of the deque. It then tests the popped point against that ball:

* inside: the index goes back to the back of the deque;
* outside: the point must lie on the boundary of the minimum ball. It joins
  the *support* set, the sub-problem is solved again with the larger
  support, and the index is moved to the *front* of the deque.

The front of the deque is tested first on the next pass. So points that once
forced the ball to grow are re-examined early, which keeps the expected
running time linear. A level stops with a closed-form circumsphere once the
support holds d+1 points or the deque runs empty.

Two drivers implement the same control flow:

* ``"recursive"``: the textbook recursion. Its depth grows with the number
  of points, so it runs under a :class:`~pyminiball.recursion.RecursionGuard`.
* ``"iterative"``: an explicit frame stack of at most n+1 entries, with no
  interpreter limit involved.

Both perform the same sequence of containment tests and circumsphere solves,
so for a given seed they return the same ball.
"""

import logging
from collections import deque
from typing import Any, Deque, List, Optional

import numpy as np

from pyminiball.Ball import Ball
from pyminiball.Circumsphere import _circumsphere
from pyminiball.ball_utils import (
    as_point_array,
    squared_distance,
    squared_distances,
    within,
)
from pyminiball.config import (
    BOUNDARY_TOL,
    DEFAULT_METHOD,
    DEFAULT_RCOND,
    DEFAULT_TOL,
    METHODS,
)
from pyminiball.errors import EmptyInputError
from pyminiball.recursion import RecursionGuard

logger = logging.getLogger(__name__)

_FIRST, _SECOND = 0, 1


def resolve_rng(
    seed: Optional[int] = None, rng: Optional[np.random.Generator] = None
) -> np.random.Generator:
    """Return the generator to shuffle with, from either a seed or a generator."""
    if seed is not None and rng is not None:
        raise ValueError("pass either seed or rng, not both")
    if rng is not None:
        if not isinstance(rng, np.random.Generator):
            raise TypeError("rng must be a numpy.random.Generator")
        return rng
    return np.random.default_rng(seed)


class _WelzlDriver:
    """Support-set bookkeeping shared by the recursive and iterative drivers."""

    def __init__(self, points: np.ndarray, tol: float, rcond: float):
        self.points = points
        self.capacity = points.shape[1] + 1
        self.tol = tol
        self.rcond = rcond
        self.solves = 0

    def base_case(self, support: List[int]) -> Optional[Ball]:
        # An empty support is the empty ball, which contains no point.
        if not support:
            return None
        self.solves += 1
        return _circumsphere(self.points[support], self.rcond)

    def encloses(self, ball: Optional[Ball], index: int) -> bool:
        if ball is None:
            return False
        dist2 = squared_distance(self.points[index], ball.center)
        return bool(within(dist2, ball.radius_squared, self.tol))

    def recursive(self, queue: Deque[int], support: List[int]) -> Optional[Ball]:
        if len(support) < self.capacity and queue:
            index = queue.pop()
            ball = self.recursive(queue, support)
            if self.encloses(ball, index):
                queue.append(index)
                return ball
            support.append(index)
            ball = self.recursive(queue, support)
            queue.appendleft(support.pop())
            return ball
        return self.base_case(support)

    def iterative(self, queue: Deque[int], support: List[int]) -> Optional[Ball]:
        # Each frame is [popped index, phase]; the phase tells which of the
        # two sub-problems has just returned its ball.
        stack: List[List[int]] = []
        ball: Optional[Ball] = None
        descend = True
        while True:
            if descend:
                if len(support) < self.capacity and queue:
                    stack.append([queue.pop(), _FIRST])
                    continue
                ball = self.base_case(support)
                descend = False
            if not stack:
                return ball
            frame = stack[-1]
            if frame[1] == _FIRST:
                if self.encloses(ball, frame[0]):
                    queue.append(frame[0])
                    stack.pop()
                else:
                    support.append(frame[0])
                    frame[1] = _SECOND
                    descend = True
            else:
                queue.appendleft(support.pop())
                stack.pop()


def _run_welzl(
    points: np.ndarray,
    queue: Deque[int],
    tol: float,
    rcond: float,
    method: str,
) -> Ball:
    """Run one pass of the chosen driver over ``queue``, reordering it in place."""
    if method not in METHODS:
        raise ValueError(f"method must be one of {METHODS}, got {method!r}")
    driver = _WelzlDriver(points, tol, rcond)
    if method == "recursive":
        with RecursionGuard(len(queue) + 1):
            ball = driver.recursive(queue, [])
    else:
        ball = driver.iterative(queue, [])
    if ball is None:
        raise EmptyInputError("at least one point is required")
    logger.debug(
        "Enclosed %d points in %d dimensions (%s): radius^2 %.6g after %d base cases",
        len(points),
        points.shape[1],
        method,
        ball.radius_squared,
        driver.solves,
    )
    return ball


def enclosing(
    points: Any,
    seed: Optional[int] = None,
    rng: Optional[np.random.Generator] = None,
    tol: float = DEFAULT_TOL,
    rcond: float = DEFAULT_RCOND,
    method: str = DEFAULT_METHOD,
) -> Ball:
    """Compute the minimum ball enclosing a set of points.

    Parameters
    ----------
    points : array-like
        An (N, d) collection of points, N >= 1.
    seed : int, optional
        Seed for the shuffle. Mutually exclusive with ``rng``.
    rng : np.random.Generator, optional
        Generator used for the shuffle. Mutually exclusive with ``seed``.
    tol : float, optional
        Containment slack on squared distances, relative to ``max(1, r^2)``.
    rcond : float, optional
        Relative singular-value cut-off for degenerate support sets.
    method : {"recursive", "iterative"}, optional
        Driver to run. Default is "recursive".

    Returns
    -------
    Ball
        The minimum enclosing ball. The same seed yields a bit-identical ball.

    Raises
    ------
    EmptyInputError
        If no points are given.
    DimensionMismatchError
        If the points do not all have the same dimension.
    DegenerateInputError
        If a support set turns out numerically affinely dependent.

    """
    pts = as_point_array(points)
    if len(pts) == 0:
        raise EmptyInputError("at least one point is required")
    order = resolve_rng(seed, rng).permutation(len(pts))
    return _run_welzl(pts, deque(order.tolist()), tol, rcond, method)


class MinimumEnclosingBall:
    """Minimum enclosing ball of a growing point cloud.

    The working deque is kept between computations in its move-to-front
    order, so recomputing after :meth:`add_points` starts from the points
    that pinned the previous ball.
    """

    def __init__(
        self,
        points: Any,
        seed: Optional[int] = None,
        rng: Optional[np.random.Generator] = None,
        tol: float = DEFAULT_TOL,
        rcond: float = DEFAULT_RCOND,
        method: str = DEFAULT_METHOD,
    ):
        """Shuffle the points once and compute their minimum enclosing ball.

        Parameters
        ----------
        points : array-like
            An (N, d) collection of points, N >= 1.
        seed : int, optional
            Seed for the initial shuffle. Mutually exclusive with ``rng``.
        rng : np.random.Generator, optional
            Generator for the initial shuffle. Mutually exclusive with ``seed``.
        tol : float, optional
            Containment slack on squared distances, relative to ``max(1, r^2)``.
        rcond : float, optional
            Relative singular-value cut-off for degenerate support sets.
        method : {"recursive", "iterative"}, optional
            Driver to run. Default is "recursive".

        """
        pts = as_point_array(points)
        if len(pts) == 0:
            raise EmptyInputError("at least one point is required")
        self.points = pts
        self.tol = tol
        self.rcond = rcond
        self.method = method
        order = resolve_rng(seed, rng).permutation(len(pts))
        self._queue: Deque[int] = deque(order.tolist())
        self.ball: Ball = self.recompute()

    @property
    def dim(self) -> int:
        """int: dimension of the point cloud."""
        return self.points.shape[1]

    @property
    def order(self) -> List[int]:
        """List[int]: point indices in their current move-to-front order."""
        return list(self._queue)

    def recompute(self) -> Ball:
        """Run Welzl's algorithm again, starting from the current point order.

        The deque is only replaced once the computation succeeds, so a
        failed run leaves the previous state intact.
        """
        queue = deque(self._queue)
        ball = _run_welzl(self.points, queue, self.tol, self.rcond, self.method)
        self._queue = queue
        self.ball = ball
        return ball

    def add_points(self, new_pts: Any) -> Ball:
        """Add points and recompute the ball.

        Points already enclosed by the current ball are queued at the front,
        points outside it at the back. If the computation fails, the points,
        their order and the ball stay as they were.

        Parameters
        ----------
        new_pts : array-like
            An (M, d) collection of points.

        Returns
        -------
        Ball
            The minimum ball enclosing the old and the new points.

        """
        new = as_point_array(new_pts, dim=self.dim)
        if len(new) == 0:
            return self.ball
        start = len(self.points)
        indices = np.arange(start, start + len(new))
        inside = within(
            squared_distances(new, self.ball.center), self.ball.radius_squared, self.tol
        )
        points = np.vstack([self.points, new])
        queue = deque(self._queue)
        queue.extendleft(reversed(indices[inside].tolist()))
        queue.extend(indices[~inside].tolist())
        ball = _run_welzl(points, queue, self.tol, self.rcond, self.method)
        self.points = points
        self._queue = queue
        self.ball = ball
        return ball

    def support_points(self, tol: float = BOUNDARY_TOL) -> np.ndarray:
        """Points lying on the boundary of the ball.

        Parameters
        ----------
        tol : float, optional
            Slack on ``| |p - c| - r |``, relative to ``max(1, r)``.

        Returns
        -------
        np.ndarray
            A (k, d) array of boundary points. A minimum ball has at
            least one; more than d+1 only for co-spherical ties.

        """
        radius = self.ball.radius
        dist = np.sqrt(squared_distances(self.points, self.ball.center))
        return self.points[np.abs(dist - radius) <= tol * max(1.0, radius)]
