import asyncio
import argparse
import os
import sys
from environs import Env

from link_budget.logging_config import get_logger, setup_logging
from link_budget.application.session import LinkBudgetSession
from link_budget.application.services.user_input_parser import MetricPrefixParser
from link_budget.domain.constants import OUTPUT_DATA_DIR
from link_budget.domain.exceptions import LinkBudgetException
from link_budget.domain.models.link import CalculationTarget
from link_budget.domain.units import PowerUnit
from link_budget.domain.validators import validate_link_parameters
from link_budget.infrastructure.storage import FileSessionStorage
from link_budget.infrastructure.output.formatters import (
    ConsoleOutputFormatter,
    JSONOutputFormatter,
)

logger = get_logger(__name__)


class AppDependencies:
    """Container for application dependencies."""

    def __init__(self, env: Env):
        self.output_dir = env.str("OUTPUT_DATA_DIR", OUTPUT_DATA_DIR)
        self.storage = FileSessionStorage(output_dir=self.output_dir)
        self.output_formatter = ConsoleOutputFormatter()
        self.default_session = env.str("LINK_BUDGET_SESSION", "default")


def parse_named_value(text: str) -> tuple[str, float]:
    """Parses "NAME=DB" as given to --gain and --loss."""
    name, sep, value = text.partition("=")
    if not sep or not name.strip():
        raise ValueError(f"Expected NAME=DB, got {text!r}")
    try:
        return name.strip(), float(value)
    except ValueError:
        raise ValueError(f"Value of {name.strip()!r} must be a number in dB")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Link Budget Calculator",
        epilog="Frequencies can be entered in scientific notation (20e6) "
        "or with a suffix (20M).",
    )
    parser.add_argument(
        "--target",
        choices=[t.value for t in CalculationTarget],
        help="Quantity to solve for (snr, distance or tx_power)",
    )
    parser.add_argument("--session", help="Stored session name")
    parser.add_argument(
        "--reset", action="store_true", help="Start from default values"
    )
    parser.add_argument("--temperature", type=float, help="Temperature in K")
    parser.add_argument("--bandwidth", help="Bandwidth in Hz, e.g. 20M")
    parser.add_argument("--frequency", help="Frequency in Hz, e.g. 2.4G")
    parser.add_argument("--distance", type=float, help="Distance in m")
    parser.add_argument("--break-distance", type=float, help="Break distance in m")
    parser.add_argument("--break-exponent", type=float, help="Break exponent")
    parser.add_argument("--snr", type=float, help="SNR in dB")
    parser.add_argument("--tx-power", type=float, help="TX power in --tx-unit")
    parser.add_argument(
        "--tx-unit", choices=[u.value for u in PowerUnit], help="TX power unit"
    )
    parser.add_argument(
        "--rx-unit", choices=[u.value for u in PowerUnit], help="RX power unit"
    )
    parser.add_argument(
        "--gain", action="append", default=[], metavar="NAME=DB", help="Add a gain"
    )
    parser.add_argument(
        "--loss", action="append", default=[], metavar="NAME=DB", help="Add a loss"
    )
    parser.add_argument(
        "--remove-gain", action="append", default=[], metavar="NAME"
    )
    parser.add_argument(
        "--remove-loss", action="append", default=[], metavar="NAME"
    )
    parser.add_argument(
        "--save-json",
        action="store_true",
        help="Save JSON output to a file in the output directory",
    )
    return parser


def apply_arguments(session: LinkBudgetSession, args: argparse.Namespace) -> None:
    """Applies command-line overrides to the session."""
    prefix_parser = MetricPrefixParser()

    if args.target:
        session.target = CalculationTarget(args.target)
    if args.rx_unit:
        session.rx_unit = PowerUnit(args.rx_unit)

    overrides = {
        "temperature": args.temperature,
        "distance": args.distance,
        "break_distance": args.break_distance,
        "break_exponent": args.break_exponent,
        "snr": args.snr,
    }
    if args.bandwidth is not None:
        overrides["bandwidth"] = prefix_parser.parse(args.bandwidth)
    if args.frequency is not None:
        overrides["frequency"] = prefix_parser.parse(args.frequency)
    session.update(**{k: v for k, v in overrides.items() if v is not None})

    if args.tx_unit:
        session.set_tx_unit(PowerUnit(args.tx_unit))
    if args.tx_power is not None:
        session.set_tx_power(args.tx_power)

    for text in args.gain:
        session.add_gain(*parse_named_value(text))
    for text in args.loss:
        session.add_loss(*parse_named_value(text))
    for name in args.remove_gain:
        session.remove_gain(name)
    for name in args.remove_loss:
        session.remove_loss(name)


async def load_session(
    deps: AppDependencies, name: str, reset: bool
) -> LinkBudgetSession:
    if reset:
        return LinkBudgetSession()
    try:
        return await deps.storage.load(name)
    except FileNotFoundError:
        logger.info("No stored session %r, starting from defaults", name)
        return LinkBudgetSession()


async def run_budget(
    session: LinkBudgetSession,
    name: str,
    args: argparse.Namespace,
    deps: AppDependencies,
) -> None:
    """Runs one solver cycle, reports it and stores the session."""
    validate_link_parameters(session.snapshot())
    breakdown = session.refresh()

    if args.save_json:
        formatter = JSONOutputFormatter()
        json_output = formatter.format_result(session, breakdown)
        file_path = os.path.join(deps.output_dir, f"{name}.report.json")
        with open(file_path, "w") as f:
            f.write(json_output)
        print(f"✅ JSON output saved to {file_path}")
    else:
        deps.output_formatter.format_result(session, breakdown)

    await deps.storage.store(name, session)


async def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    # Load environment variables as early as possible within main()
    env = Env()
    env.read_env(".env")

    # Setup logging ONLY AFTER environment variables are loaded
    setup_logging(env)

    deps = AppDependencies(env)
    name = args.session or deps.default_session

    try:
        session = await load_session(deps, name, args.reset)
        apply_arguments(session, args)
        await run_budget(session, name, args, deps)
    except ValueError as e:
        # InvalidMagnitude and ValidationError are ValueErrors too
        print(f"Error: {e}")
        return 1
    except LinkBudgetException as e:
        print(f"Error: {e}\nUse --reset to start from default values.")
        return 1
    return 0


def run() -> None:
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
