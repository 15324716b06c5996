"""
Routing configuration for elbow arrows.

Tuning values live as module-level constants so they are easy to find and
adjust; RoutingConfig bundles them for a single router instance.
"""

from dataclasses import dataclass

# =============================================================================
# ROUTING CONFIGURATION - Adjust these values to tune routing behavior
# =============================================================================

# --- Distance/Spacing Parameters (in world units) ---

# Clearance kept between a routed path and the blocks it connects
DEFAULT_PADDING = 20

# --- Exit Direction Parameters ---

# Fraction of the point-to-center offset used to nudge an anchor into its
# block before casting exit rays (keeps points on an edge from grazing it)
EXIT_NUDGE_FACTOR = 0.01

# Anchors whose UV lies within this distance of (0.5, 0.5) on both axes exit
# toward the other endpoint instead of through the nearest side
CENTER_THRESHOLD = 0.2

# --- Numeric Parameters ---

# Tolerance for coordinate comparisons
EPSILON = 1e-6

# Upper bound on simplifier sweeps (each zig-zag merge drops two points,
# so real paths settle long before this)
MAX_SIMPLIFY_PASSES = 32

# =============================================================================


@dataclass
class RoutingConfig:
    """
    Tunable parameters for a router.

    Attributes:
        padding: Default clearance around blocks when a call does not pass one
        nudge_factor: Fraction of the offset toward the block center used to
            nudge anchors before exit rays are cast
        center_threshold: UV distance from the block center inside which the
            exit prefers the direction toward the other endpoint
        epsilon: Tolerance for coordinate comparisons
        max_simplify_passes: Maximum number of simplifier sweeps
    """

    padding: float = DEFAULT_PADDING
    nudge_factor: float = EXIT_NUDGE_FACTOR
    center_threshold: float = CENTER_THRESHOLD
    epsilon: float = EPSILON
    max_simplify_passes: int = MAX_SIMPLIFY_PASSES

    def __post_init__(self):
        if self.padding < 0:
            raise ValueError("padding must be non-negative")
        if not 0 <= self.nudge_factor < 1:
            raise ValueError("nudge_factor must be in [0, 1)")
        if not 0 <= self.center_threshold <= 0.5:
            raise ValueError("center_threshold must be in [0, 0.5]")
        if self.epsilon <= 0:
            raise ValueError("epsilon must be positive")
        if self.max_simplify_passes < 1:
            raise ValueError("max_simplify_passes must be at least 1")
