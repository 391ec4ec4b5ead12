"""Custom exceptions for the marketpulse analytics core.

All windowing, alignment and arithmetic failures live here so that the
rotation and breadth modules can raise and catch them without importing
each other.
"""


class MarketPulseError(Exception):
    """Base exception for all marketpulse errors."""


class InsufficientDataError(MarketPulseError):
    """Raised when a window operation has fewer samples than its period requires.

    Attributes:
        required: Number of samples the operation needs.
        available: Number of samples it was given.
        shortfall: required - available.
    """

    def __init__(self, required: int, available: int, context: str = "") -> None:
        self.required = required
        self.available = available
        self.shortfall = required - available
        message = (
            f"Insufficient data: need {required} samples, got {available} "
            f"(short by {self.shortfall})"
        )
        if context:
            message = f"{message} [{context}]"
        super().__init__(message)


class LengthMismatchError(MarketPulseError):
    """Raised when symbol and benchmark windows disagree in length after alignment."""

    def __init__(self, symbol_length: int, benchmark_length: int) -> None:
        self.symbol_length = symbol_length
        self.benchmark_length = benchmark_length
        super().__init__(
            f"Symbol and benchmark windows must have the same length "
            f"(symbol={symbol_length}, benchmark={benchmark_length})"
        )


class ComputationError(MarketPulseError):
    """Raised when an arithmetic step produced no valid value."""
