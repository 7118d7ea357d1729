"""StableSurge error classes.

Every domain precondition violation raises a subclass of DomainError
instead of letting NaN or infinity flow through the pool math.
"""


class StableSurgeError(Exception):
    """Base error for stable pool and surge fee operations."""

    pass


class DomainError(StableSurgeError):
    """An input violates a precondition of the pool math."""

    pass


class InvalidAmplificationError(DomainError):
    """Amplification coefficient must be a positive finite number."""

    pass


class InvalidBalanceError(DomainError):
    """Balance sets need at least two finite, non-negative balances."""

    pass


class ZeroBalanceError(InvalidBalanceError):
    """Known balances must be positive when solving for a missing balance."""

    pass


class InvalidInvariantError(DomainError):
    """Invariant must be a positive finite number."""

    pass


class InvalidPercentageError(DomainError):
    """Percentages must be finite and within [0, 100]."""

    pass
