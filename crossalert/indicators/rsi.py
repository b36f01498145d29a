"""RSI (Relative Strength Index) calculation"""

from collections.abc import Sequence

from .moving_average import wilder_series


def gains_and_losses(closes: Sequence[float]) -> tuple[list[float], list[float]]:
    """
    Split close-to-close changes into gains and losses

    The first index has no predecessor and contributes zero to both.
    """
    gains = [0.0]
    losses = [0.0]
    for i in range(1, len(closes)):
        change = closes[i] - closes[i - 1]
        gains.append(max(change, 0.0))
        losses.append(max(-change, 0.0))
    return gains[:len(closes)], losses[:len(closes)]


def rsi_from_averages(average_gain: float, average_loss: float) -> float:
    """
    RSI = 100 - 100 / (1 + average_gain / average_loss)

    A flat history (no gains, no losses) yields 0; no losses yields 100.
    """
    if average_loss == 0:
        return 0.0 if average_gain == 0 else 100.0
    relative_strength = average_gain / average_loss
    return 100.0 - 100.0 / (1.0 + relative_strength)


def rsi_series(closes: Sequence[float], period: int = 14) -> list[float]:
    """
    Calculate RSI with Wilder smoothing of gains and losses

    Args:
        closes: Close prices in chronological order
        period: RSI period (default 14)

    Returns:
        RSI per index in [0, 100]
    """
    gains, losses = gains_and_losses(closes)
    average_gains = wilder_series(gains, period)
    average_losses = wilder_series(losses, period)
    return [rsi_from_averages(g, l) for g, l in zip(average_gains, average_losses)]
