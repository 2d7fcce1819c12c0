# link_budget/domain/models/__init__.py
from link_budget.domain.units import Hertz, Kelvin, Meters, Decibels, DbMilliwatts, Watts, PowerUnit
from .link import CalculationTarget, PowerValue, LinkParameters
from .report import BudgetBreakdown

__all__ = [
    "Hertz",
    "Kelvin",
    "Meters",
    "Decibels",
    "DbMilliwatts",
    "Watts",
    "PowerUnit",
    "CalculationTarget",
    "PowerValue",
    "LinkParameters",
    "BudgetBreakdown",
]
