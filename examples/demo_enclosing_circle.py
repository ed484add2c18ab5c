import numpy as np
import matplotlib.pyplot as plt
from pyminiball import MinimumEnclosingBall, plot_ball

rng = np.random.default_rng(0)
data = rng.normal(loc=[2.0, -1.0], scale=0.5, size=(50, 2))

meb = MinimumEnclosingBall(data, seed=0)

fig, ax = plt.subplots()
plot_ball(meb.ball, data, ax)

support = meb.support_points()
ax.scatter(
    support[:, 0],
    support[:, 1],
    color="r",
    marker="o",
    s=30,
)

# grow the cloud and redraw
extra = rng.normal(loc=[4.0, 1.0], scale=0.3, size=(10, 2))
meb.add_points(extra)
plot_ball(meb.ball, extra, ax, line_color="b", marker_color="b")

plt.show()
