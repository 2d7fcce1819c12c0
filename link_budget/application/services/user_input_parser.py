import math
import re

from link_budget.domain.exceptions import InvalidMagnitude


class MetricPrefixParser:
    """
    Parses and formats scalars with decimal metric prefixes (k, M, G, ...).
    Accepts plain and scientific notation ("20e6") as well as a prefixed
    mantissa ("20M", "2.4 G"). Only multiplying prefixes are understood.
    """

    _number_pattern = re.compile(
        r"^(?P<mantissa>[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)\s*(?P<prefix>\S*)$"
    )

    def __init__(self) -> None:
        self.prefix_factors = {
            "k": 1e3,
            "M": 1e6,
            "G": 1e9,
            "T": 1e12,
            "P": 1e15,
            "E": 1e18,
            "Z": 1e21,
            "Y": 1e24,
        }
        # Upper-case kilo is a common misspelling
        self.aliases = {"K": "k"}
        self.prefixes_descending = sorted(
            self.prefix_factors.items(), key=lambda item: item[1], reverse=True
        )

    def parse(self, text: str) -> float:
        """
        Parses text such as "20M" or "2.4e9" into a float.

        Raises:
            InvalidMagnitude: Empty or malformed text, or an unknown prefix
        """
        if not isinstance(text, str):
            raise InvalidMagnitude(f"Expected text, got {type(text)}")

        stripped = text.strip()
        if not stripped:
            raise InvalidMagnitude("Input cannot be empty.")

        match = self._number_pattern.match(stripped)
        if match is None:
            raise InvalidMagnitude(f"Not a number: {text!r}")

        mantissa = float(match.group("mantissa"))
        prefix = match.group("prefix")
        if not prefix:
            value = mantissa
        else:
            prefix = self.aliases.get(prefix, prefix)
            if prefix not in self.prefix_factors:
                raise InvalidMagnitude(f"Unknown metric prefix {prefix!r} in {text!r}")
            value = mantissa * self.prefix_factors[prefix]

        if not math.isfinite(value):
            raise InvalidMagnitude(f"Magnitude out of range: {text!r}")
        return value

    def format(self, value: float, precision: int = 1) -> str:
        """
        Formats a value with the largest prefix that keeps the mantissa
        magnitude in [1, 1000). Values below 1000 carry no prefix but keep
        the trailing separator, so a unit can always be appended directly.
        """
        if not math.isfinite(value):
            return f"{value} "

        magnitude = abs(value)
        for index, (prefix, factor) in enumerate(self.prefixes_descending):
            if magnitude < factor:
                continue
            mantissa = value / factor
            if index > 0 and round(abs(mantissa), precision) >= 1000:
                # Rounding pushed it up to the next prefix
                prefix, factor = self.prefixes_descending[index - 1]
                mantissa = value / factor
            return f"{mantissa:.{precision}f} {prefix}"

        if round(magnitude, precision) >= 1000:
            # Rounds up into kilo
            prefix, factor = self.prefixes_descending[-1]
            return f"{value / factor:.{precision}f} {prefix}"
        return f"{value:.{precision}f} "


_default_parser = MetricPrefixParser()


def parse_metric_prefixed(text: str) -> float:
    """Module-level shortcut for MetricPrefixParser().parse."""
    return _default_parser.parse(text)


def format_metric_prefixed(value: float, precision: int = 1) -> str:
    """Module-level shortcut for MetricPrefixParser().format."""
    return _default_parser.format(value, precision)
