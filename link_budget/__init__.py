"""Radio link budget calculator with a single-unknown solver."""

from link_budget.application.services.user_input_parser import (
    format_metric_prefixed,
    parse_metric_prefixed,
)
from link_budget.application.session import LinkBudgetSession
from link_budget.application.solver import closure_error, evaluate_cycle, solve
from link_budget.domain.conversions import convert_power
from link_budget.domain.models.link import CalculationTarget, LinkParameters, PowerValue
from link_budget.domain.noise import thermal_noise_floor_dbm, thermal_noise_power
from link_budget.domain.propagation import distance_from_path_loss, path_loss
from link_budget.domain.units import PowerUnit

__all__ = [
    "CalculationTarget",
    "LinkBudgetSession",
    "LinkParameters",
    "PowerUnit",
    "PowerValue",
    "closure_error",
    "convert_power",
    "distance_from_path_loss",
    "evaluate_cycle",
    "format_metric_prefixed",
    "parse_metric_prefixed",
    "path_loss",
    "solve",
    "thermal_noise_floor_dbm",
    "thermal_noise_power",
]
