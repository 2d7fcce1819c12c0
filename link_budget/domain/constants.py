"""Constants used across the application."""

import os
from pathlib import Path

# Output directory for stored sessions - configurable via environment variable
OUTPUT_DATA_DIR = os.getenv("OUTPUT_DATA_DIR", str(Path.cwd() / "output_data"))

# Physical constants
BOLTZMANN_CONSTANT = 1.380649e-23  # J/K
SPEED_OF_LIGHT = 299792458.0  # m/s

# Friis calibration: loss at 1 m and 1 GHz
REFERENCE_LOSS_DB = 32.0
REFERENCE_FREQUENCY_HZ = 1e9
NEAR_FIELD_EXPONENT = 2.0

# Default value of a freshly added named gain or loss
DEFAULT_NAMED_VALUE_DB = 10.0
