# link_budget/domain/units.py
"""
Type-safe unit definitions for link budget calculations.

This module uses NewType to create distinct types for different units,
helping catch unit mix-ups (Hz vs. MHz, dBm vs. W) at type-checking time.

Usage:
    from link_budget.domain.units import Hertz, Meters, Decibels

    def path_loss(distance: Meters, frequency: Hertz) -> Decibels:
        ...
"""

from enum import Enum
from typing import NewType

# Base physical units
Hertz = NewType("Hertz", float)  # Frequency or bandwidth in Hz
Kelvin = NewType("Kelvin", float)  # Absolute temperature
Meters = NewType("Meters", float)  # Distance in meters
Watts = NewType("Watts", float)  # Linear power

# Logarithmic units
Decibels = NewType("Decibels", float)  # Relative gain or loss
DbMilliwatts = NewType("DbMilliwatts", float)  # Absolute power referred to 1 mW


class PowerUnit(str, Enum):
    """Display unit of a power quantity. The value is the display label."""

    DBM = "dBm"
    DBW = "dBW"
    MILLIWATT = "mW"
    WATT = "W"

    def __str__(self) -> str:
        return self.value
