import json
from unittest.mock import patch

import pytest

from link_budget.application.session import LinkBudgetSession
from link_budget.main import main, parse_named_value


@pytest.fixture
def workdir(tmp_path, monkeypatch):
    """Runs main() in an empty directory with its own output dir."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("OUTPUT_DATA_DIR", str(tmp_path / "out"))
    monkeypatch.delenv("LINK_BUDGET_SESSION", raising=False)
    return tmp_path


def _stored(workdir, name="default") -> dict:
    return json.loads((workdir / "out" / f"{name}.json").read_text())


@pytest.mark.asyncio
async def test_main_solves_and_stores_session(workdir, capsys):
    exit_code = await main(
        ["--target", "distance", "--bandwidth", "20M", "--gain", "antennas=12"]
    )

    assert exit_code == 0
    output = capsys.readouterr().out
    assert "Link Budget (solving for DISTANCE)" in output

    record = _stored(workdir)
    assert record["target"] == "distance"
    assert record["gains"] == {"antennas": 12.0}
    session = LinkBudgetSession.from_dict(record)
    assert session.refresh().closure_error_db == pytest.approx(0.0, abs=1e-9)


@pytest.mark.asyncio
async def test_main_reuses_stored_session(workdir):
    await main(["--session", "lab", "--loss", "cable=2.5", "--frequency", "868M"])
    await main(["--session", "lab", "--remove-loss", "cable", "--loss", "fading=6"])

    record = _stored(workdir, "lab")
    assert record["losses"] == {"fading": 6.0}
    assert record["parameters"]["frequency"] == pytest.approx(868e6)


@pytest.mark.asyncio
async def test_main_session_name_from_env(workdir, monkeypatch):
    monkeypatch.setenv("LINK_BUDGET_SESSION", "from_env")
    assert await main([]) == 0
    assert (workdir / "out" / "from_env.json").exists()


@pytest.mark.asyncio
async def test_main_tx_power_in_watts(workdir):
    await main(["--target", "snr", "--tx-unit", "W", "--tx-power", "0.5"])

    tx_power = _stored(workdir)["parameters"]["tx_power"]
    assert tx_power["unit"] == "W"
    assert tx_power["val_dbm"] == pytest.approx(26.9897, abs=1e-4)


@pytest.mark.asyncio
async def test_main_save_json(workdir, capsys):
    assert await main(["--save-json", "--target", "tx_power"]) == 0

    assert "JSON output saved" in capsys.readouterr().out
    report = json.loads((workdir / "out" / "default.report.json").read_text())
    assert report["calculation_target"] == "tx_power"
    assert report["budget"]["closes"] is True


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "argv",
    [
        ["--bandwidth", "20Q"],
        ["--frequency", ""],
        ["--gain", "no-value"],
        ["--temperature", "-3"],
    ],
)
async def test_main_rejects_bad_input(workdir, capsys, argv):
    assert await main(argv) == 1
    assert "Error:" in capsys.readouterr().out
    assert not (workdir / "out" / "default.json").exists()


@pytest.mark.asyncio
async def test_main_reports_corrupt_session(workdir, capsys):
    out_dir = workdir / "out"
    out_dir.mkdir()
    (out_dir / "default.json").write_text("{broken")

    assert await main([]) == 1
    assert "--reset" in capsys.readouterr().out

    assert await main(["--reset"]) == 0
    assert _stored(workdir)["target"] == "snr"


@pytest.mark.asyncio
async def test_main_reports_undecodable_session(workdir, capsys):
    out_dir = workdir / "out"
    out_dir.mkdir()
    (out_dir / "default.json").write_bytes(b"\xff\xfe\x00garbage")

    assert await main([]) == 1
    assert "--reset" in capsys.readouterr().out


@pytest.mark.asyncio
async def test_main_configures_logging_from_env(workdir):
    with patch("link_budget.main.setup_logging") as mock_setup_logging:
        await main([])
    mock_setup_logging.assert_called_once()


@pytest.mark.parametrize(
    "text, expected",
    [("antenna=6", ("antenna", 6.0)), (" cable = -1.5", ("cable", -1.5)), ("a=b=1", None)],
)
def test_parse_named_value(text, expected):
    if expected is None:
        with pytest.raises(ValueError):
            parse_named_value(text)
    else:
        assert parse_named_value(text) == expected
