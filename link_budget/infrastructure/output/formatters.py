"""Output formatting services for console display."""

import json
import math
from typing import Protocol

from link_budget.application.services.user_input_parser import format_metric_prefixed
from link_budget.application.session import LinkBudgetSession
from link_budget.domain.models.report import BudgetBreakdown


def _format_dict_floats(d, precision):
    for k, v in d.items():
        if isinstance(v, float):
            d[k] = round(v, precision) + 0.0  # no "-0.00"
        elif isinstance(v, dict):
            _format_dict_floats(v, precision)
    return d


def _null_non_finite(value):
    """Strict JSON has no NaN or Infinity; those become null."""
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _null_non_finite(v) for k, v in value.items()}
    return value


def _build_output_dict(
    session: LinkBudgetSession,
    breakdown: BudgetBreakdown,
) -> dict:
    params = session.parameters
    tx_power = params.tx_power
    rx_power = session.rx_power

    output_dict = {
        "calculation_target": session.target.value,
        "parameters": {
            "temperature_k": params.temperature,
            "bandwidth_hz": params.bandwidth,
            "frequency_hz": params.frequency,
            "snr_db": params.snr,
            "tx_power": {
                "value": tx_power.in_unit(),
                "unit": tx_power.unit.value,
                "dbm": tx_power.val_dbm,
            },
            "rx_power": {
                "value": rx_power.in_unit(),
                "unit": rx_power.unit.value,
                "dbm": rx_power.val_dbm,
            },
        },
        "path_loss": {
            "distance_m": params.distance,
            "break_distance_m": params.break_distance,
            "break_exponent": params.break_exponent,
            "path_loss_db": breakdown.path_loss_db,
            "wavelength_m": breakdown.wavelength_m,
        },
        "gains": dict(session.gains),
        "losses": dict(session.losses),
        "budget": breakdown.to_dict(),
    }
    _format_dict_floats(output_dict["parameters"], 2)
    _format_dict_floats(output_dict["path_loss"], 2)
    _format_dict_floats(output_dict["budget"], 2)
    return output_dict


class OutputFormatter(Protocol):
    """Protocol for output formatting strategies"""

    def format_result(
        self,
        session: LinkBudgetSession,
        breakdown: BudgetBreakdown,
    ) -> None:
        """Format and display a budget evaluation"""
        ...


class ConsoleOutputFormatter:
    """Format budget results for console output"""

    def format_result(
        self,
        session: LinkBudgetSession,
        breakdown: BudgetBreakdown,
    ) -> None:
        output_dict = _build_output_dict(session, breakdown)
        params = output_dict["parameters"]
        path = output_dict["path_loss"]
        budget = output_dict["budget"]

        print(f"\n{'=' * 60}")
        print(f"Link Budget (solving for {output_dict['calculation_target'].upper()})")
        print(f"{'=' * 60}")

        print("\n📡 Parameters:")
        print(f"  Temperature:             {params['temperature_k']:.1f} K")
        print(
            f"  Bandwidth:               {format_metric_prefixed(session.parameters.bandwidth)}Hz"
        )
        print(f"  Thermal noise floor:     {budget['noise_floor_dbm']:.1f} dBm")
        print(
            f"  Frequency:               {format_metric_prefixed(session.parameters.frequency)}Hz"
        )
        print(f"  SNR:                     {params['snr_db']:.2f} dB")
        print(
            f"  Tx Power:                {params['tx_power']['value']:.2f} "
            f"{params['tx_power']['unit']}"
        )
        print(
            f"  Rx Power:                {params['rx_power']['value']:.2f} "
            f"{params['rx_power']['unit']}"
        )

        print("\n📉 Free Space Path Loss:")
        print(f"  Distance:                {path['distance_m']:.1f} m")
        print(f"  Break distance:          {path['break_distance_m']:.1f} m")
        print(f"  Break exponent:          {path['break_exponent']:.2f}")
        print(f"  Path Loss:               {path['path_loss_db']:.1f} dB")

        if output_dict["gains"]:
            print("\n📈 Gains:")
            for name, value in output_dict["gains"].items():
                print(f"  {name:<24} {value:.2f} dB")
        if output_dict["losses"]:
            print("\n📉 Losses:")
            for name, value in output_dict["losses"].items():
                print(f"  {name:<24} {value:.2f} dB")

        print("\n🚀 Budget:")
        print(f"  Total gains:             {budget['total_gains']:.2f} dB")
        print(f"  Total losses:            {budget['total_losses']:.2f} dB")
        print(f"  Closure error:           {budget['closure_error_db']:.2f} dB")
        print(f"  Link closes:             {'yes' if budget['closes'] else 'no'}")
        print(f"{'=' * 60}\n")


class JSONOutputFormatter:
    """Format budget results as JSON (for automation)"""

    def format_result(
        self,
        session: LinkBudgetSession,
        breakdown: BudgetBreakdown,
    ) -> str:
        output_dict = _build_output_dict(session, breakdown)
        return json.dumps(_null_non_finite(output_dict), indent=2, allow_nan=False)
