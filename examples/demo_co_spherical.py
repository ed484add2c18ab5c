from pyminiball import MinimumEnclosingBall
import numpy as np

m = 100_000
print(f"n = 3, m = {m}")
print()

center = np.array([-3.0, 7.0, 4.8])
radius = 3.0
radius_squared = radius * radius

directions = np.random.default_rng().normal(size=(m, 3))
directions /= np.linalg.norm(directions, axis=1)[:, None]
points = directions * radius + center

# recompute on the move-to-front order left behind by the previous pass
meb = MinimumEnclosingBall(points, method="iterative")
balls = [meb.ball] + [meb.recompute() for _ in range(7)]
for ball in balls:
    epsilon = ball.radius_squared / radius_squared - 1.0
    print(f"sample with accuracy: 1{epsilon:+.1e}")

ball = min(balls, key=lambda b: b.radius_squared)
print()
epsilon = ball.radius_squared / radius_squared - 1.0
print(f"result with accuracy: 1{epsilon:+.1e}")
