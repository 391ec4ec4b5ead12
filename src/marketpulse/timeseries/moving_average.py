"""Windowed moving averages over ordered Decimal sequences.

Series are ordered oldest-first. Every function raises
InsufficientDataError instead of returning a sentinel when the series is
shorter than the window; callers decide whether to propagate, skip or
default.

CRITICAL: All computations use Decimal. Never use float.
"""

from collections.abc import Sequence
from decimal import Decimal

from marketpulse.exceptions import InsufficientDataError


def _check_window(window: int, available: int, name: str) -> None:
    if window < 1:
        raise ValueError(f"{name} window must be positive, got {window}")
    if available < window:
        raise InsufficientDataError(
            required=window, available=available, context=f"{name}({window})"
        )


def sma_series(window: int, series: Sequence[Decimal]) -> list[Decimal | None]:
    """Compute a rolling simple moving average aligned to the input.

    ``result[i]`` is the mean of ``series[i - window + 1 : i + 1]`` for
    ``i >= window - 1`` and None before that, so the output has the same
    length as the input. A window of 1 reproduces the series.

    Uses a running sum so the whole series costs O(n).

    Args:
        window: Number of samples per average.
        series: Values ordered oldest-first.

    Returns:
        List of the same length as ``series``.

    Raises:
        InsufficientDataError: If ``len(series) < window``.
    """
    _check_window(window, len(series), "sma")

    result: list[Decimal | None] = [None] * (window - 1)
    divisor = Decimal(window)
    running = sum(series[:window], Decimal("0"))
    result.append(running / divisor)
    for i in range(window, len(series)):
        running += series[i] - series[i - window]
        result.append(running / divisor)

    return result


def sma(window: int, series: Sequence[Decimal]) -> Decimal:
    """Simple mean of the last ``window`` values.

    Raises:
        InsufficientDataError: If ``len(series) < window``.
    """
    _check_window(window, len(series), "sma")
    return sum(series[-window:], Decimal("0")) / Decimal(window)


def wma(window: int, series: Sequence[Decimal]) -> Decimal:
    """Linearly weighted mean of the last ``window`` values.

    The most recent sample carries weight ``window``, the one before it
    ``window - 1``, down to weight 1 for the oldest sample in the window:

        WMA = sum(w_k * x_k) / sum(w_k),  w_k = 1..window (oldest..newest)

    A constant series yields that constant.

    Args:
        window: Number of samples to weight.
        series: Values ordered oldest-first. Only the tail is used.

    Returns:
        The weighted mean as Decimal.

    Raises:
        InsufficientDataError: If ``len(series) < window``.
    """
    _check_window(window, len(series), "wma")

    tail = series[-window:]
    weighted = Decimal("0")
    for weight, value in enumerate(tail, start=1):
        weighted += value * weight
    weight_sum = Decimal(window * (window + 1) // 2)
    return weighted / weight_sum


def ema(window: int, series: Sequence[Decimal]) -> Decimal:
    """Exponential moving average of the whole series, returning the last value.

    Uses the standard recursive formula seeded with the first value:
        alpha = 2 / (window + 1)
        EMA_t = alpha * value_t + (1 - alpha) * EMA_{t-1}

    Raises:
        InsufficientDataError: If ``len(series) < window``.
    """
    _check_window(window, len(series), "ema")

    alpha = Decimal("2") / (Decimal(window) + Decimal("1"))
    one_minus_alpha = Decimal("1") - alpha

    current = series[0]
    for value in series[1:]:
        current = alpha * value + one_minus_alpha * current
    return current
