"""Numerical constants for the stable pool and surge fee engine.

Values match the on-chain StableMath iteration and the defaults of the
StableSurge hook simulator.
"""

# Maximum fixed-point iterations when solving the invariant D
STABLE_MAX_ITERATIONS = 255

# Iteration stops once |D_new - D_old| drops below one unit
INVARIANT_TOLERANCE = 1.0

# Percentages are expressed on a 0-100 scale
PERCENT_SCALE = 100.0

# Simulator defaults
DEFAULT_AMPLIFICATION = 100.0
DEFAULT_STATIC_FEE_PERCENTAGE = 1.0
DEFAULT_MAX_SURGE_FEE_PERCENTAGE = 10.0
DEFAULT_SURGE_THRESHOLD_PERCENTAGE = 20.0

# Curve sampling
CURVE_POINTS = 1_000
CURVE_POINTS_WITH_FEES = 10_000
CURVE_RANGE_SCAN_STEPS = 1_000
# The x-range ends once the out balance falls below 1/100 of its current value
CURVE_RANGE_OUT_DIVISOR = 100.0
# Scan x in steps of balances[out] / 10
CURVE_RANGE_STEP_DIVISOR = 10.0
IMBALANCE_SWEEP_STEPS = 10_000
