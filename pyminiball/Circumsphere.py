"""
Circumsphere module
===================

Closed-form base case of Welzl's algorithm: the smallest ball whose boundary
passes through a set of affinely independent *bounds*.

For bounds ``p_0 .. p_k`` write the center as ``c = p_0 + x``. Equal distance
to every bound gives ``2 (p_i - p_0) . x = |p_i - p_0|^2`` for ``i = 1..k``.
For ``k < d`` this system is underdetermined. Its minimum-norm solution
keeps ``x`` in the span of the edges ``p_i - p_0``, i.e. the center in the
affine hull of the bounds, which is the smallest of all the balls through
them.
"""

import numpy as np
from typing import Any

from pyminiball.Ball import Ball
from pyminiball.ball_utils import as_point_array, solve_least_norm
from pyminiball.config import DEFAULT_RCOND
from pyminiball.errors import EmptyInputError, WrongArityError


def _circumsphere(bounds: np.ndarray, rcond: float = DEFAULT_RCOND) -> Ball:
    """Circumscribed ball of the rows of an already validated (k+1, d) array."""
    origin = bounds[0]
    if len(bounds) == 1:
        return Ball(origin, 0.0)

    edges = bounds[1:] - origin
    rhs = 0.5 * np.einsum("ij,ij->i", edges, edges)
    offset = solve_least_norm(edges, rhs, rcond)
    return Ball(origin + offset, float(np.dot(offset, offset)))


def circumsphere(bounds: Any, rcond: float = DEFAULT_RCOND) -> Ball:
    """Compute the smallest ball whose boundary passes through every bound.

    Parameters
    ----------
    bounds : array-like
        A (k+1, d) collection of points with 1 <= k+1 <= d+1.
    rcond : float, optional
        Relative singular-value cut-off used to detect affinely dependent bounds.

    Returns
    -------
    Ball
        The ball centered in the affine hull of the bounds.

    Raises
    ------
    EmptyInputError
        If no bounds are given.
    WrongArityError
        If more than d+1 bounds are given.
    DegenerateInputError
        If the bounds are affinely dependent.

    """
    pts = as_point_array(bounds)
    if len(pts) == 0:
        raise EmptyInputError("at least one bound is required")
    dim = pts.shape[1]
    if len(pts) > dim + 1:
        raise WrongArityError(
            f"at most {dim + 1} bounds define a ball in {dim} dimensions, got {len(pts)}"
        )
    return _circumsphere(pts, rcond)


def circumscribed(bounds: Any, rcond: float = DEFAULT_RCOND) -> Ball:
    """Compute the unique ball passing through exactly d+1 points in d dimensions.

    Parameters
    ----------
    bounds : array-like
        A (d+1, d) collection of affinely independent points.
    rcond : float, optional
        Relative singular-value cut-off used to detect affinely dependent bounds.

    Returns
    -------
    Ball
        The circumscribed ball of the d-simplex spanned by ``bounds``.

    Raises
    ------
    EmptyInputError
        If no bounds are given, so the dimension cannot be determined.
    WrongArityError
        If the number of bounds is not d+1.
    DegenerateInputError
        If the bounds are affinely dependent.

    """
    pts = as_point_array(bounds)
    if len(pts) == 0:
        raise EmptyInputError("at least one bound is required")
    dim = pts.shape[1]
    if len(pts) != dim + 1:
        raise WrongArityError(
            f"exactly {dim + 1} bounds define a ball in {dim} dimensions, got {len(pts)}"
        )
    return _circumsphere(pts, rcond)
