# --- numerical tolerances ---
# Containment slack, relative to max(1, r^2).
DEFAULT_TOL = 1e-10
# Relative singular-value cut-off below which bounds count as affinely dependent.
DEFAULT_RCOND = 1e-10

# --- recursion guard ---
# Frames kept free above the measured depth before the limit is raised.
RECURSION_RED_ZONE = 64
# Deepest recursion the guard agrees to set up; use method="iterative" beyond it.
MAX_RECURSION_DEPTH = 1_000_000

# --- drivers ---
METHODS = ("recursive", "iterative")
DEFAULT_METHOD = "recursive"

# --- reporting ---
# Slack on distances when listing boundary points, relative to max(1, r).
BOUNDARY_TOL = 1.5e-8
