# link_budget/domain/propagation.py
"""
Dual-slope Friis free-space propagation model.

Below the break distance the loss grows with the free-space exponent of 2,
beyond it with the empirical break exponent:

    PL(d) = 32 + 20 log10(f / 1 GHz) + 20 log10(d)                       d < d0
    PL(d) = 32 + 20 log10(f / 1 GHz) + 20 log10(d0) + 10 n log10(d / d0)  d >= d0

Both directions accept scalars or numpy arrays. Non-positive logarithm
arguments produce inf/NaN instead of raising; callers that need finite
results must validate first.
"""

from typing import Any

import numpy as np
from numpy.typing import ArrayLike, NDArray

from link_budget.domain.constants import (
    NEAR_FIELD_EXPONENT,
    REFERENCE_FREQUENCY_HZ,
    REFERENCE_LOSS_DB,
)


def _scalar_or_array(value: NDArray[np.float64]) -> Any:
    if np.ndim(value) == 0:
        return float(value)
    return value


def _frequency_loss(frequency_hz: float) -> float:
    return 20.0 * np.log10(frequency_hz / REFERENCE_FREQUENCY_HZ)


def _loss_at_break(break_distance_m: float) -> float:
    # 1 m reference distance
    return NEAR_FIELD_EXPONENT * 10.0 * np.log10(break_distance_m / 1.0)


def path_loss(
    distance_m: ArrayLike,
    break_distance_m: float,
    frequency_hz: float,
    break_exponent: float,
) -> Any:
    """
    Forward dual-slope path loss.

    Args:
        distance_m: Distance(s) between transmitter and receiver in meters
        break_distance_m: Distance where the far-field slope begins
        frequency_hz: Carrier frequency in Hz
        break_exponent: Path-loss exponent beyond the break distance

    Returns:
        Path loss in dB, a float for scalar input or an array otherwise
    """
    distance = np.asarray(distance_m, dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore"):
        near = NEAR_FIELD_EXPONENT * 10.0 * np.log10(distance / 1.0)
        far = _loss_at_break(break_distance_m) + break_exponent * 10.0 * np.log10(
            distance / break_distance_m
        )
        loss = (
            REFERENCE_LOSS_DB
            + _frequency_loss(frequency_hz)
            + np.where(distance < break_distance_m, near, far)
        )

    return _scalar_or_array(loss)


def distance_from_path_loss(
    path_loss_db: ArrayLike,
    break_distance_m: float,
    frequency_hz: float,
    break_exponent: float,
) -> Any:
    """
    Inverse of path_loss: the distance at which the given loss is reached.

    The reference and frequency terms are removed first; the remaining
    distance-dependent loss is compared with the loss at the break distance
    to pick the slope to invert. A loss exactly at the break maps to the
    near-field branch.
    """
    loss = np.asarray(path_loss_db, dtype=np.float64)

    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        distance_loss = loss - REFERENCE_LOSS_DB - _frequency_loss(frequency_hz)
        loss_at_break = _loss_at_break(break_distance_m)

        near = np.power(10.0, distance_loss / (NEAR_FIELD_EXPONENT * 10.0))
        far = break_distance_m * np.power(
            10.0, (distance_loss - loss_at_break) / (break_exponent * 10.0)
        )
        distance = np.where(distance_loss <= loss_at_break, near, far)

    return _scalar_or_array(distance)


def path_loss_profile(
    distances_m: ArrayLike,
    break_distance_m: float,
    frequency_hz: float,
    break_exponent: float,
) -> NDArray[np.float64]:
    """Path loss over a sweep of distances, always returned as a 1D array."""
    distances = np.atleast_1d(np.asarray(distances_m, dtype=np.float64))
    return np.atleast_1d(
        path_loss(distances, break_distance_m, frequency_hz, break_exponent)
    )
