"""Test domain models for link parameters"""

import dataclasses
import math

import pytest

from link_budget.domain.models import (
    BudgetBreakdown,
    CalculationTarget,
    LinkParameters,
    PowerUnit,
    PowerValue,
)


def test_power_value_defaults_to_zero_dbm():
    power = PowerValue()
    assert power.val_dbm == 0.0
    assert power.unit is PowerUnit.DBM
    assert str(power) == "0.00 dBm"


def test_changing_unit_keeps_canonical_value():
    power = PowerValue(val_dbm=20.0)
    in_watts = power.with_unit(PowerUnit.WATT)

    assert in_watts.val_dbm == 20.0
    assert in_watts.in_unit() == pytest.approx(0.1)
    assert in_watts.with_unit(PowerUnit.DBW).in_unit() == pytest.approx(-10.0)


@pytest.mark.parametrize(
    "unit, entered, expected_dbm",
    [
        (PowerUnit.DBM, 17.0, 17.0),
        (PowerUnit.DBW, 0.0, 30.0),
        (PowerUnit.MILLIWATT, 100.0, 20.0),
        (PowerUnit.WATT, 2.0, 33.0103),
    ],
)
def test_from_unit_converts_once(unit, entered, expected_dbm):
    power = PowerValue(unit=unit).from_unit(entered)
    assert power.val_dbm == pytest.approx(expected_dbm, abs=1e-4)
    assert power.unit is unit
    assert power.in_unit() == pytest.approx(entered)


def test_power_value_is_immutable():
    power = PowerValue()
    with pytest.raises(dataclasses.FrozenInstanceError):
        power.val_dbm = 3.0


def test_link_parameters_defaults():
    params = LinkParameters()
    assert params.temperature == 290.0
    assert params.bandwidth == 20e6
    assert params.frequency == 2.4e9
    assert params.distance == 2000.0
    assert params.break_distance == 500.0
    assert params.break_exponent == 4.3
    assert params.snr == 10.0
    assert params.tx_power == PowerValue()


def test_link_parameters_flat_record():
    params = LinkParameters(
        snr=12.5, tx_power=PowerValue(val_dbm=23.0, unit=PowerUnit.MILLIWATT)
    )
    record = params.to_dict()

    assert record["snr"] == 12.5
    assert record["tx_power"] == {"val_dbm": 23.0, "unit": "mW"}
    assert LinkParameters.from_dict(record) == params


def test_link_parameters_from_partial_record_uses_defaults():
    params = LinkParameters.from_dict({"distance": 150})
    assert params.distance == 150.0
    assert params.frequency == LinkParameters().frequency


def test_link_parameters_from_record_rejects_bad_unit():
    with pytest.raises(ValueError):
        LinkParameters.from_dict({"tx_power": {"val_dbm": 0.0, "unit": "furlong"}})


def test_calculation_target_values():
    assert CalculationTarget("snr") is CalculationTarget.SNR
    assert CalculationTarget("distance") is CalculationTarget.DISTANCE
    assert CalculationTarget("tx_power") is CalculationTarget.TX_POWER
    assert len(CalculationTarget) == 3


def _breakdown(error: float) -> BudgetBreakdown:
    return BudgetBreakdown(
        noise_floor_dbm=-100.0,
        path_loss_db=110.0,
        total_gains=0.0,
        total_losses=0.0,
        rx_power_dbm=-90.0,
        closure_error_db=error,
        wavelength_m=0.125,
    )


@pytest.mark.parametrize(
    "error, closes", [(3.0, True), (0.0, True), (-0.5, False), (math.nan, False), (math.inf, False)]
)
def test_breakdown_closes(error, closes):
    assert _breakdown(error).closes is closes


def test_breakdown_to_dict_includes_closes():
    data = _breakdown(1.0).to_dict()
    assert data["closure_error_db"] == 1.0
    assert data["closes"] is True
