"""
Library-wide settings.
"""
import logging

# Absolute tolerance used by Vector.isclose / Quaternion.isclose
ATOL = 1e-9

LOG_LEVEL = logging.INFO
LOG_FORMAT = '[%(asctime)s] [%(name)s] %(levelname)s: %(message)s'
