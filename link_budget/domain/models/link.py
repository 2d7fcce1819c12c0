from dataclasses import dataclass, field, fields, replace
from enum import Enum
from typing import Any

from link_budget.domain.conversions import from_dbm, to_dbm
from link_budget.domain.units import (
    Decibels,
    DbMilliwatts,
    Hertz,
    Kelvin,
    Meters,
    PowerUnit,
)


class BaseModel:
    def to_dict(self) -> dict[str, Any]:
        """Converts a dataclass instance to a flat dictionary, handling nested
        models and enums.
        """
        result = {}
        for f in fields(self):
            result[f.name] = self._convert_value(getattr(self, f.name))
        return result

    def _convert_value(self, value: Any) -> Any:
        if hasattr(value, "to_dict"):
            return value.to_dict()
        if isinstance(value, Enum):
            return value.value
        return value


class CalculationTarget(Enum):
    """The single quantity that absorbs the closure error each cycle."""

    SNR = "snr"
    DISTANCE = "distance"
    TX_POWER = "tx_power"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class PowerValue(BaseModel):
    """
    Power quantity stored canonically in dBm.

    The unit is presentation-only: switching it never changes val_dbm.
    Only from_unit() converts, once, from the display unit into dBm.
    """

    val_dbm: DbMilliwatts = DbMilliwatts(0.0)
    unit: PowerUnit = PowerUnit.DBM

    def in_unit(self) -> float:
        """Canonical value expressed in the display unit."""
        return from_dbm(self.val_dbm, self.unit)

    def from_unit(self, value: float) -> "PowerValue":
        """New value entered in the display unit."""
        return replace(self, val_dbm=to_dbm(value, self.unit))

    def with_unit(self, unit: PowerUnit) -> "PowerValue":
        return replace(self, unit=PowerUnit(unit))

    def with_dbm(self, val_dbm: float) -> "PowerValue":
        return replace(self, val_dbm=DbMilliwatts(float(val_dbm)))

    def __str__(self) -> str:
        return f"{self.val_dbm:.2f} {self.unit}"

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PowerValue":
        return cls(
            val_dbm=DbMilliwatts(float(data["val_dbm"])),
            unit=PowerUnit(data.get("unit", PowerUnit.DBM.value)),
        )


@dataclass(frozen=True, slots=True)
class LinkParameters(BaseModel):
    """
    Immutable snapshot of every input to one evaluation cycle.

    Named gains and losses enter only as their precomputed sums.
    Defaults describe a 2.4 GHz / 20 MHz link over 2 km.
    """

    temperature: Kelvin = Kelvin(290.0)
    bandwidth: Hertz = Hertz(20e6)
    frequency: Hertz = Hertz(2.4e9)
    distance: Meters = Meters(2000.0)
    break_distance: Meters = Meters(500.0)
    break_exponent: float = 4.3
    total_gains: Decibels = Decibels(0.0)
    total_losses: Decibels = Decibels(0.0)
    snr: Decibels = Decibels(10.0)
    tx_power: PowerValue = field(default_factory=PowerValue)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LinkParameters":
        """Build a snapshot from a flat record; missing keys take defaults."""
        values: dict[str, Any] = {}
        for f in fields(cls):
            if f.name not in data:
                continue
            if f.name == "tx_power":
                values[f.name] = PowerValue.from_dict(data[f.name])
            else:
                values[f.name] = float(data[f.name])
        return cls(**values)
