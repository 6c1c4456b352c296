# Mathematical utilities
# FORBIDDEN: logging, any I/O

import numpy as np

# Open interval (0, 1) bounds
_PROB_MIN = float(np.nextafter(0.0, 1.0))
_PROB_MAX = float(np.nextafter(1.0, 0.0))


def sigmoid(value: float) -> float:
    """Logistic function e^x / (1 + e^x).

    Evaluated in split form so that large |x| never overflows the
    exponential, then kept strictly inside (0, 1).

    Args:
        value: Raw score

    Returns:
        Value in the open interval (0, 1)
    """
    if value >= 0:
        result = 1.0 / (1.0 + np.exp(-value))
    else:
        k = np.exp(value)
        result = k / (1.0 + k)
    return float(np.clip(result, _PROB_MIN, _PROB_MAX))


def kmh_to_ms(speed_kmh: float) -> float:
    """Convert km/h to m/s."""
    return speed_kmh / 3.6
