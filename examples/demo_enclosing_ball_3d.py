from pyminiball import enclosing, plot_ball_3d
import numpy as np

# Uniform distribution in a cube with side 3 around an offset
offset = np.array([-3.0, 7.0, 4.8])
points = (np.random.default_rng(1).random((2000, 3)) - 0.5) * 3.0 + offset

ball = enclosing(points, seed=1)
print(f"center: {ball.center}, radius: {ball.radius:.6f}")

plot_ball_3d(ball, points, title="Ball enclosing a cube").show()
