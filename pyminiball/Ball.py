"""
Ball module
===========

The :class:`Ball` value type returned by every routine in the package: a
center point and a squared radius in **d** dimensions. Keeping the radius
squared avoids a square root in the containment test that dominates the
running time of Welzl's algorithm.
"""

import numpy as np
from typing import Any

from pyminiball.ball_utils import squared_distance, within
from pyminiball.config import DEFAULT_TOL


class Ball:
    """An immutable d-dimensional ball given by its center and squared radius."""

    __slots__ = ("_center", "_radius_squared")

    def __init__(self, center: Any, radius_squared: float):
        """Create a ball.

        Parameters
        ----------
        center : array-like
            The (d,) center point. It is copied and made read-only.
        radius_squared : float
            The squared radius. Must be finite and non-negative.

        """
        center = np.array(center, dtype=float)
        if center.ndim != 1:
            raise ValueError("center must be a 1-d vector")
        radius_squared = float(radius_squared)
        if not radius_squared >= 0.0:
            raise ValueError("radius_squared must be non-negative")
        center.setflags(write=False)
        self._center = center
        self._radius_squared = radius_squared

    @property
    def center(self) -> np.ndarray:
        """np.ndarray: the (d,) center point (read-only)."""
        return self._center

    @property
    def radius_squared(self) -> float:
        """float: the squared radius."""
        return self._radius_squared

    @property
    def radius(self) -> float:
        """float: the radius."""
        return float(np.sqrt(self._radius_squared))

    @property
    def dim(self) -> int:
        """int: the dimension of the ambient space."""
        return self._center.shape[0]

    def contains(self, point: np.ndarray, tol: float = DEFAULT_TOL) -> bool:
        """Check whether a point lies inside or on the ball.

        Parameters
        ----------
        point : np.ndarray
            A point of shape (d,).
        tol : float, optional
            Slack on the squared distance, relative to ``max(1, r^2)``.

        Returns
        -------
        bool
            True if ``|point - center|^2 <= r^2 + tol * max(1, r^2)``.

        """
        dist2 = squared_distance(np.asarray(point, dtype=float), self._center)
        return bool(within(dist2, self._radius_squared, tol))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Ball):
            return NotImplemented
        return (
            self._radius_squared == other._radius_squared
            and np.array_equal(self._center, other._center)
        )

    def __hash__(self) -> int:
        return hash((self._center.tobytes(), self._radius_squared))

    def __repr__(self) -> str:
        return (
            f"Ball(center={self._center.tolist()!r}, "
            f"radius_squared={self._radius_squared!r})"
        )
