from pyminiball.Ball import Ball
from pyminiball.Circumsphere import circumscribed, circumsphere
from pyminiball.Welzl import MinimumEnclosingBall, enclosing
from pyminiball.errors import (
    MiniballError,
    EmptyInputError,
    WrongArityError,
    DegenerateInputError,
    DimensionMismatchError,
    RecursionDepthError,
)
from pyminiball.recursion import RecursionGuard
from pyminiball.plotting import plot_ball, plot_ball_3d

__all__ = [
    "Ball",
    "circumscribed",
    "circumsphere",
    "enclosing",
    "MinimumEnclosingBall",
    "MiniballError",
    "EmptyInputError",
    "WrongArityError",
    "DegenerateInputError",
    "DimensionMismatchError",
    "RecursionDepthError",
    "RecursionGuard",
    "plot_ball",
    "plot_ball_3d",
]
