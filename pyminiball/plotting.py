import matplotlib.pyplot as plt
from matplotlib.axes import Axes
from matplotlib.patches import Circle
from mpl_toolkits.mplot3d import Axes3D  # noqa
import numpy as np
import plotly.graph_objects as go
from typing import Any, Optional

from pyminiball.Ball import Ball
from pyminiball.ball_utils import as_point_array
from pyminiball.errors import DimensionMismatchError


def _sphere_mesh(ball: Ball, resolution: int = 30):
    """
    Sample the surface of a 3-ball on a latitude/longitude grid.

    Parameters
    ----------
    ball : Ball
        A ball of dimension 3.
    resolution : int, optional
        Number of latitude samples; twice as many longitudes are used.

    Returns
    -------
    Tuple[np.ndarray, np.ndarray, np.ndarray]
        The x, y and z coordinate grids of the surface.
    """
    u, v = np.mgrid[0:2*np.pi:2j*resolution, 0:np.pi:1j*resolution]
    r = ball.radius
    cx, cy, cz = ball.center
    xs = cx + r * np.cos(u) * np.sin(v)
    ys = cy + r * np.sin(u) * np.sin(v)
    zs = cz + r * np.cos(v)
    return xs, ys, zs


def plot_ball(
    ball: Ball,
    points: Optional[Any] = None,
    ax: Optional[Axes] = None,
    line_width: float = 1.0,
    line_color: Any = "r",
    marker_size: float = 10,
    marker_color: Any = "k",
):
    """
    Plot a 2D ball (circle) and optionally the points it encloses using Matplotlib.

    Parameters
    ----------
    ball : Ball
        A ball of dimension 2.
    points : array-like, optional
        An (N, 2) collection of points to scatter.
    ax : matplotlib.axes.Axes, optional
        An optional Matplotlib axis to plot on. A new figure is created if None.
    line_width : float, optional
        Width of the circle outline, by default 1.0.
    line_color : Any, optional
        Color of the circle outline, by default 'r'.
    marker_size : float, optional
        Size of the point markers, by default 10.
    marker_color : Any, optional
        Color of the point markers, by default 'k'.

    Returns
    -------
    matplotlib.axes.Axes
        The axis plotted on.
    """
    if ball.dim != 2:
        raise DimensionMismatchError(f"plot_ball needs a 2D ball, got {ball.dim}D")

    if ax is None:
        fig, ax = plt.subplots()

    ax.add_patch(
        Circle(
            tuple(ball.center),
            ball.radius,
            fill=False,
            color=line_color,
            linewidth=line_width,
        )
    )
    if points is not None:
        pts = as_point_array(points, dim=2)
        ax.scatter(pts[:, 0], pts[:, 1], color=marker_color, marker=".", s=marker_size)
    ax.set_aspect("equal", adjustable="datalim")
    ax.autoscale_view()
    return ax


def plot_ball_3d(
    ball: Ball,
    points: Optional[Any] = None,
    title: str = "Minimum Enclosing Ball",
    fig: Optional[go.Figure] = None,
    ax: Optional[Axes] = None,
    surface_opacity: float = 0.15,
    marker_size: float = 3,
    marker_color: Any = "black",
):
    """
    Visualize a 3D ball and optionally the points it encloses using either
    Matplotlib or Plotly.

    Parameters
    ----------
    ball : Ball
        A ball of dimension 3.
    points : array-like, optional
        An (N, 3) collection of points to scatter.
    title : str, optional
        Title of the plot. Default is "Minimum Enclosing Ball".
    fig : plotly.graph_objects.Figure, optional
        A Plotly figure to add to. If None, a new figure is created.
    ax : matplotlib.axes.Axes, optional
        A Matplotlib 3D axis object to plot on. If provided, Matplotlib is used.
    surface_opacity : float, optional
        Opacity of the ball surface. Default is 0.15.
    marker_size : float, optional
        Size of the point markers. Default is 3.
    marker_color : Any, optional
        Color of the point markers. Default is "black".

    Returns
    -------
    plotly.graph_objects.Figure or matplotlib.axes.Axes
        The figure or axis object used for plotting.
    """
    if ball.dim != 3:
        raise DimensionMismatchError(f"plot_ball_3d needs a 3D ball, got {ball.dim}D")

    pts = None if points is None else as_point_array(points, dim=3)
    xs, ys, zs = _sphere_mesh(ball)

    if ax is not None:
        ax.set_title(title)
        ax.set_box_aspect([1, 1, 1])
        ax.plot_surface(xs, ys, zs, color="lightgrey", alpha=surface_opacity, linewidth=0)
        if pts is not None:
            ax.scatter(pts[:, 0], pts[:, 1], pts[:, 2], color=marker_color, s=marker_size**2)
        return ax

    if fig is None:
        fig = go.Figure()

    fig.add_trace(go.Surface(
        x=xs, y=ys, z=zs,
        opacity=surface_opacity,
        showscale=False,
        colorscale='Greys',
        name='Ball'
    ))
    if pts is not None:
        fig.add_trace(go.Scatter3d(
            x=pts[:, 0], y=pts[:, 1], z=pts[:, 2],
            mode='markers',
            marker=dict(size=marker_size, color=marker_color),
            name='Points'
        ))

    fig.update_layout(
        title=title,
        scene=dict(xaxis=dict(showgrid=False),
                   yaxis=dict(showgrid=False),
                   zaxis=dict(showgrid=False),
                   aspectmode='data'),
        margin=dict(l=0, r=0, b=0, t=30)
    )
    return fig
