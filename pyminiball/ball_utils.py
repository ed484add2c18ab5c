import numpy as np
import scipy.linalg
from typing import Any, Optional

from pyminiball.config import DEFAULT_RCOND, DEFAULT_TOL
from pyminiball.errors import DegenerateInputError, DimensionMismatchError


def as_point_array(points: Any, dim: Optional[int] = None) -> np.ndarray:
    """
    Copy a collection of points into a fresh (N, d) float array.

    Parameters
    ----------
    points : array-like
        An (N, d) array, or a sequence of N coordinate sequences.
    dim : int, optional
        The expected dimension d. If None, it is taken from the first point.

    Returns
    -------
    np.ndarray
        An (N, d) float array owned by the caller. For N == 0 the shape is
        (0, dim), or (0, 0) when ``dim`` is None.

    Raises
    ------
    DimensionMismatchError
        If a point is not a flat vector or its length differs from ``dim``.
    """
    if isinstance(points, np.ndarray) and points.ndim == 2:
        arr = np.array(points, dtype=float)
        if dim is not None and arr.shape[1] != dim and len(arr) > 0:
            raise DimensionMismatchError(
                f"expected points of dimension {dim}, got {arr.shape[1]}"
            )
        if len(arr) == 0:
            return np.empty((0, 0 if dim is None else dim))
        return _ensure_finite(arr)

    rows = [np.asarray(p, dtype=float) for p in points]
    if not rows:
        return np.empty((0, 0 if dim is None else dim))
    if dim is None:
        if rows[0].ndim != 1:
            raise DimensionMismatchError("each point must be a flat coordinate vector")
        dim = rows[0].shape[0]
    for i, row in enumerate(rows):
        if row.ndim != 1 or row.shape[0] != dim:
            raise DimensionMismatchError(
                f"point {i} has shape {row.shape}, expected ({dim},)"
            )
    return _ensure_finite(np.stack(rows).reshape(len(rows), dim))


def _ensure_finite(arr: np.ndarray) -> np.ndarray:
    if not np.all(np.isfinite(arr)):
        raise ValueError("point coordinates must be finite")
    return arr


def squared_distance(u: np.ndarray, v: np.ndarray) -> float:
    """Squared Euclidean distance between two points."""
    diff = u - v
    return float(np.dot(diff, diff))


def squared_distances(points: np.ndarray, center: np.ndarray) -> np.ndarray:
    """Squared Euclidean distances from each row of ``points`` to ``center``."""
    diff = points - center
    return np.einsum("ij,ij->i", diff, diff)


def within(dist2: Any, radius_squared: float, tol: float = DEFAULT_TOL) -> Any:
    """Containment test ``dist2 <= r^2 + tol * max(1, r^2)``, scalar or vectorized."""
    return dist2 <= radius_squared + tol * max(1.0, radius_squared)


def solve_least_norm(
    edges: np.ndarray, rhs: np.ndarray, rcond: float = DEFAULT_RCOND
) -> np.ndarray:
    """
    Minimum-norm solution of ``E x = rhs``.

    The rows of ``E`` are ``p_i - p_0`` for a set of bounds. The solution
    lies in the row space of ``E``, i.e. in the affine hull of the bounds
    once ``p_0`` is added back. Full row rank of ``E`` is the same as the
    bounds being affinely independent.

    Parameters
    ----------
    edges : np.ndarray
        A (k, d) matrix with k >= 1.
    rhs : np.ndarray
        A (k,) right-hand side.
    rcond : float, optional
        Relative cut-off on the smallest singular value of ``E``.

    Returns
    -------
    np.ndarray
        The (d,) solution.

    Raises
    ------
    DegenerateInputError
        If k > d, or the smallest singular value of ``E`` is at most ``rcond``
        times the largest one.
    """
    k, d = edges.shape
    if k > d:
        raise DegenerateInputError(
            f"{k + 1} bounds cannot be affinely independent in {d} dimensions"
        )
    try:
        x, _, _, s = scipy.linalg.lstsq(edges, rhs, lapack_driver="gelsd")
    except np.linalg.LinAlgError as exc:
        raise DegenerateInputError("least-norm solve did not converge") from exc
    if s[0] == 0.0 or s[k - 1] <= rcond * s[0]:
        ratio = s[k - 1] / s[0] if s[0] else 0.0
        raise DegenerateInputError(
            f"bounds are affinely dependent (singular value ratio {ratio:.3e})"
        )
    return x
