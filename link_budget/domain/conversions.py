# link_budget/domain/conversions.py
"""
Power unit conversions.

All functions are total over finite floats: a non-positive linear power maps
to -inf or NaN instead of raising, so the budget solver can detect degenerate
inputs with a single finiteness check.
"""

import numpy as np

from link_budget.domain.constants import SPEED_OF_LIGHT
from link_budget.domain.units import (
    DbMilliwatts,
    Hertz,
    Meters,
    PowerUnit,
    Watts,
)


def _log10(value: float) -> float:
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.log10(value))


def _exp10(value: float) -> float:
    with np.errstate(over="ignore"):
        return float(np.power(10.0, value))


def milliwatt_to_dbm(power_mw: float) -> DbMilliwatts:
    return DbMilliwatts(10.0 * _log10(power_mw))


def dbm_to_milliwatt(power_dbm: float) -> float:
    return _exp10(power_dbm / 10.0)


def watt_to_dbm(power_w: Watts) -> DbMilliwatts:
    return DbMilliwatts(10.0 * _log10(power_w * 1000.0))


def dbm_to_watt(power_dbm: float) -> Watts:
    return Watts(_exp10(power_dbm / 10.0) / 1000.0)


def dbw_to_dbm(power_dbw: float) -> DbMilliwatts:
    return DbMilliwatts(power_dbw + 30.0)


def dbm_to_dbw(power_dbm: float) -> float:
    return power_dbm - 30.0


_FROM_DBM = {
    PowerUnit.DBM: lambda dbm: dbm,
    PowerUnit.DBW: dbm_to_dbw,
    PowerUnit.MILLIWATT: dbm_to_milliwatt,
    PowerUnit.WATT: dbm_to_watt,
}

_TO_DBM = {
    PowerUnit.DBM: lambda value: value,
    PowerUnit.DBW: dbw_to_dbm,
    PowerUnit.MILLIWATT: milliwatt_to_dbm,
    PowerUnit.WATT: watt_to_dbm,
}


def to_dbm(value: float, unit: PowerUnit) -> DbMilliwatts:
    """Express a power given in ``unit`` as dBm."""
    return DbMilliwatts(float(_TO_DBM[PowerUnit(unit)](value)))


def from_dbm(power_dbm: float, unit: PowerUnit) -> float:
    """Express a power given in dBm in ``unit``."""
    return float(_FROM_DBM[PowerUnit(unit)](power_dbm))


def convert_power(value: float, from_unit: PowerUnit, to_unit: PowerUnit) -> float:
    """
    Convert a power value between any two supported units.

    The conversion always goes through the canonical dBm representation.

    Args:
        value: Power expressed in ``from_unit``
        from_unit: Unit of ``value``
        to_unit: Requested unit

    Returns:
        The same power expressed in ``to_unit``
    """
    if PowerUnit(from_unit) == PowerUnit(to_unit):
        return float(value)
    return from_dbm(to_dbm(value, from_unit), to_unit)


def wavelength(frequency_hz: Hertz) -> Meters:
    """Free-space wavelength in meters for the given frequency."""
    with np.errstate(divide="ignore", invalid="ignore"):
        return Meters(float(np.divide(SPEED_OF_LIGHT, frequency_hz)))
