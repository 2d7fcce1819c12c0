# link_budget/domain/noise.py
import numpy as np

from link_budget.domain.constants import BOLTZMANN_CONSTANT
from link_budget.domain.conversions import watt_to_dbm
from link_budget.domain.units import DbMilliwatts, Hertz, Kelvin, Watts


def thermal_noise_power(temperature_k: Kelvin, bandwidth_hz: Hertz) -> Watts:
    """
    Johnson-Nyquist noise power in watts.

    Formula: P = k_B * T * B
    """
    return Watts(BOLTZMANN_CONSTANT * temperature_k * bandwidth_hz)


def thermal_noise_temperature(power_w: Watts, bandwidth_hz: Hertz) -> Kelvin:
    """
    Equivalent noise temperature of a noise power.

    Exact inverse of thermal_noise_power for a positive bandwidth. A zero
    bandwidth yields inf or NaN rather than raising.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return Kelvin(float(np.divide(power_w, bandwidth_hz * BOLTZMANN_CONSTANT)))


def thermal_noise_floor_dbm(temperature_k: Kelvin, bandwidth_hz: Hertz) -> DbMilliwatts:
    """Thermal noise floor in dBm (-inf for zero bandwidth or temperature)."""
    return watt_to_dbm(thermal_noise_power(temperature_k, bandwidth_hz))
