# link_budget/application/services/__init__.py
from .user_input_parser import (
    MetricPrefixParser,
    parse_metric_prefixed,
    format_metric_prefixed,
)

__all__ = [
    "MetricPrefixParser",
    "parse_metric_prefixed",
    "format_metric_prefixed",
]
