"""Editable link budget state, independent of how it is displayed."""

from dataclasses import dataclass, field, fields, replace
from typing import Any

from link_budget.application.solver import compute_breakdown, evaluate_cycle
from link_budget.domain.constants import DEFAULT_NAMED_VALUE_DB
from link_budget.domain.models.link import (
    CalculationTarget,
    LinkParameters,
    PowerValue,
)
from link_budget.domain.models.report import BudgetBreakdown
from link_budget.domain.units import DbMilliwatts, PowerUnit
from link_budget.logging_config import get_logger

logger = get_logger(__name__)

_SCALAR_FIELDS = (
    "temperature",
    "bandwidth",
    "frequency",
    "distance",
    "break_distance",
    "break_exponent",
    "snr",
)


@dataclass(slots=True)
class LinkBudgetSession:
    """
    Model that holds everything a user edits between evaluations.

    Named gains and losses live here; the solver only ever sees their sums
    through snapshot(). Defaults match LinkParameters.
    """

    parameters: LinkParameters = field(default_factory=LinkParameters)
    gains: dict[str, float] = field(default_factory=dict)
    losses: dict[str, float] = field(default_factory=dict)
    target: CalculationTarget = CalculationTarget.SNR
    rx_unit: PowerUnit = PowerUnit.DBM

    def __post_init__(self):
        self.target = CalculationTarget(self.target)
        self.rx_unit = PowerUnit(self.rx_unit)

    @property
    def total_gains(self) -> float:
        return float(sum(self.gains.values()))

    @property
    def total_losses(self) -> float:
        return float(sum(self.losses.values()))

    def snapshot(self) -> LinkParameters:
        """Immutable parameters for one cycle, with gain and loss sums."""
        return replace(
            self.parameters,
            total_gains=self.total_gains,
            total_losses=self.total_losses,
        )

    def refresh(self) -> BudgetBreakdown:
        """
        Run one solver cycle and keep its result.

        Returns:
            Breakdown of the budget after the update
        """
        updated = evaluate_cycle(self.snapshot(), self.target)
        self.parameters = updated
        return compute_breakdown(updated)

    @property
    def rx_power(self) -> PowerValue:
        """Required receive power: SNR on top of the thermal noise floor."""
        breakdown = compute_breakdown(self.snapshot())
        return PowerValue(DbMilliwatts(breakdown.rx_power_dbm), self.rx_unit)

    def update(self, **values: Any) -> None:
        """Overwrite scalar parameters; unknown names raise ValueError."""
        unknown = set(values) - set(_SCALAR_FIELDS)
        if unknown:
            raise ValueError(f"Unknown parameters: {', '.join(sorted(unknown))}")
        self.parameters = replace(
            self.parameters, **{k: float(v) for k, v in values.items()}
        )

    def set_tx_power(self, value: float, unit: PowerUnit | None = None) -> None:
        """Enter a TX power in ``unit`` (the current display unit by default)."""
        tx_power = self.parameters.tx_power
        if unit is not None:
            tx_power = tx_power.with_unit(unit)
        self._set_parameter(tx_power=tx_power.from_unit(value))

    def set_tx_unit(self, unit: PowerUnit) -> None:
        self._set_parameter(tx_power=self.parameters.tx_power.with_unit(unit))

    def _set_parameter(self, **values: Any) -> None:
        self.parameters = replace(self.parameters, **values)

    def add_gain(self, name: str, value: float = DEFAULT_NAMED_VALUE_DB) -> bool:
        return self._add(self.gains, name, value)

    def add_loss(self, name: str, value: float = DEFAULT_NAMED_VALUE_DB) -> bool:
        return self._add(self.losses, name, value)

    def remove_gain(self, name: str) -> None:
        self.gains.pop(name, None)

    def remove_loss(self, name: str) -> None:
        self.losses.pop(name, None)

    def _add(self, entries: dict[str, float], name: str, value: float) -> bool:
        """Insert or overwrite a named entry. Blank names are ignored."""
        name = name.strip()
        if not name:
            logger.debug("Ignoring entry with blank name")
            return False
        entries[name] = float(value)
        return True

    def reset(self) -> None:
        """Return every field to its default."""
        defaults = LinkBudgetSession()
        for f in fields(self):
            setattr(self, f.name, getattr(defaults, f.name))

    def to_dict(self) -> dict[str, Any]:
        """Flat record for storage."""
        return {
            "parameters": self.parameters.to_dict(),
            "gains": dict(self.gains),
            "losses": dict(self.losses),
            "target": self.target.value,
            "rx_unit": self.rx_unit.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LinkBudgetSession":
        return cls(
            parameters=LinkParameters.from_dict(data.get("parameters", {})),
            gains={str(k): float(v) for k, v in data.get("gains", {}).items()},
            losses={str(k): float(v) for k, v in data.get("losses", {}).items()},
            target=CalculationTarget(data.get("target", CalculationTarget.SNR.value)),
            rx_unit=PowerUnit(data.get("rx_unit", PowerUnit.DBM.value)),
        )
