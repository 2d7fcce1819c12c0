"""Domain models for budget evaluation results"""

import math
from dataclasses import dataclass
from typing import Any

from link_budget.domain.models.link import BaseModel

# Residue left after a solver cycle still counts as balanced
CLOSURE_TOLERANCE_DB = 1e-9


@dataclass(frozen=True, slots=True)
class BudgetBreakdown(BaseModel):
    """
    Every derived quantity of one evaluation cycle.

    This is a pure data structure; values may be non-finite when the
    inputs are degenerate (e.g. zero bandwidth).
    """

    noise_floor_dbm: float
    path_loss_db: float
    total_gains: float  # dB
    total_losses: float  # dB
    rx_power_dbm: float  # SNR + noise floor
    closure_error_db: float  # surplus (>0) or deficit (<0)
    wavelength_m: float

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.closure_error_db)

    @property
    def closes(self) -> bool:
        """True when the link meets its SNR with zero or positive margin."""
        return self.is_finite and self.closure_error_db >= -CLOSURE_TOLERANCE_DB

    def to_dict(self) -> dict[str, Any]:
        data = BaseModel.to_dict(self)
        data["closes"] = self.closes
        return data
