"""Input validation utilities for link budget calculations.

The core functions never raise on degenerate physics; these helpers let
front-ends reject bad input before it reaches them.
"""

import math

from link_budget.domain.models.link import LinkParameters


class ValidationError(ValueError):
    """Raised when validation fails."""

    pass


def validate_finite(value: float, name: str = "value") -> None:
    """Validate that a value is a finite number.

    Args:
        value: Value to check
        name: Name for error messages

    Raises:
        ValidationError: If value is not numeric, NaN or infinite
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ValidationError(f"{name} must be numeric, got {type(value)}")

    if not math.isfinite(value):
        raise ValidationError(f"{name} must be finite, got {value}")


def validate_positive(value: float, name: str = "value") -> None:
    validate_finite(value, name)
    if value <= 0:
        raise ValidationError(f"{name} must be positive, got {value}")


def validate_non_negative(value: float, name: str = "value") -> None:
    validate_finite(value, name)
    if value < 0:
        raise ValidationError(f"{name} must be non-negative, got {value}")


def validate_link_parameters(params: LinkParameters) -> None:
    """Validate a parameter snapshot.

    Args:
        params: Snapshot to check

    Raises:
        ValidationError: On the first field outside its physical domain

    Note:
        Bandwidth and distance may be zero; the solver then skips the cycle.
    """
    if not isinstance(params, LinkParameters):
        raise ValidationError(f"Expected LinkParameters, got {type(params)}")

    validate_positive(params.temperature, "Temperature")
    validate_non_negative(params.bandwidth, "Bandwidth")
    validate_positive(params.frequency, "Frequency")
    validate_non_negative(params.distance, "Distance")
    validate_positive(params.break_distance, "Break distance")
    validate_positive(params.break_exponent, "Break exponent")
    validate_finite(params.total_gains, "Total gains")
    validate_finite(params.total_losses, "Total losses")
    validate_finite(params.snr, "SNR")
    validate_finite(params.tx_power.val_dbm, "TX power")
