"""Single-degree-of-freedom link budget solver.

Each cycle turns the current parameters into one closure error (dB) and
moves the selected target by exactly that amount. Everything is linear in
dB except distance, which goes through the closed-form path-loss inverse,
so one cycle reaches equilibrium.
"""

import math
from dataclasses import replace

from link_budget.domain.conversions import wavelength
from link_budget.domain.models.link import CalculationTarget, LinkParameters
from link_budget.domain.models.report import BudgetBreakdown
from link_budget.domain.noise import thermal_noise_floor_dbm
from link_budget.domain.propagation import distance_from_path_loss, path_loss
from link_budget.logging_config import get_logger

logger = get_logger(__name__)


def _path_loss(params: LinkParameters) -> float:
    return path_loss(
        params.distance,
        params.break_distance,
        params.frequency,
        params.break_exponent,
    )


def compute_breakdown(params: LinkParameters) -> BudgetBreakdown:
    """Every derived quantity of the budget for one snapshot."""
    noise_floor = thermal_noise_floor_dbm(params.temperature, params.bandwidth)
    loss = _path_loss(params)

    received = params.tx_power.val_dbm + params.total_gains
    required = noise_floor + params.total_losses + loss + params.snr

    return BudgetBreakdown(
        noise_floor_dbm=noise_floor,
        path_loss_db=loss,
        total_gains=params.total_gains,
        total_losses=params.total_losses,
        rx_power_dbm=params.snr + noise_floor,
        closure_error_db=received - required,
        wavelength_m=wavelength(params.frequency),
    )


def closure_error(params: LinkParameters) -> float:
    """
    Budget surplus (positive) or deficit (negative) in dB.

    (TX power + gains) - (noise floor + losses + path loss + SNR)
    """
    return compute_breakdown(params).closure_error_db


def evaluate_cycle(
    params: LinkParameters, target: CalculationTarget
) -> LinkParameters:
    """
    Absorb the closure error into the one field selected by ``target``.

    Args:
        params: Immutable snapshot of the current inputs
        target: Field that is solved for this cycle

    Returns:
        The updated snapshot. The input object itself is returned untouched
        when the closure error is NaN or infinite, or when the solved value
        overflows (a distance must also stay above zero).
    """
    target = CalculationTarget(target)
    error = closure_error(params)

    if not math.isfinite(error):
        logger.debug("Non-finite closure error %s, skipping cycle", error)
        return params

    if target is CalculationTarget.SNR:
        new_value = params.snr + error
    elif target is CalculationTarget.TX_POWER:
        new_value = params.tx_power.val_dbm - error
    elif target is CalculationTarget.DISTANCE:
        new_value = distance_from_path_loss(
            _path_loss(params) + error,
            params.break_distance,
            params.frequency,
            params.break_exponent,
        )
    else:
        raise ValueError(f"Unknown calculation target: {target}")

    # A zero distance has no finite path loss either
    if not math.isfinite(new_value) or (
        target is CalculationTarget.DISTANCE and new_value <= 0
    ):
        logger.debug("Solved %s out of range (%s), skipping cycle", target, new_value)
        return params

    if target is CalculationTarget.SNR:
        updated = replace(params, snr=new_value)
    elif target is CalculationTarget.TX_POWER:
        updated = replace(params, tx_power=params.tx_power.with_dbm(new_value))
    else:
        updated = replace(params, distance=new_value)

    logger.debug("Applied closure error %.6f dB to %s: %s", error, target, updated)
    return updated


def solve(
    params: LinkParameters,
    target: CalculationTarget,
    max_cycles: int = 4,
    tolerance: float = 1e-9,
) -> LinkParameters:
    """
    Run evaluate_cycle until the budget balances.

    One cycle is normally enough; the extra cycles only mop up
    floating-point residue.
    """
    if max_cycles < 1:
        raise ValueError("max_cycles must be at least 1")

    for _ in range(max_cycles):
        params = evaluate_cycle(params, target)
        error = closure_error(params)
        if not math.isfinite(error) or abs(error) <= tolerance:
            break
    return params
