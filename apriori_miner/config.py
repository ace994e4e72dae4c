"""
Configuration defaults for the frequent itemset miner.
Values can be overridden through environment variables, command-line flags
or the Streamlit sidebar.
"""

import math
import os
import numbers
import logging

from apriori_miner.errors import InvalidThresholdError

logger = logging.getLogger(__name__)

# Threshold used by the reference grocery run
DEFAULT_MIN_SUPPORT = 0.05
DEFAULT_DATA_PATH = os.path.join('data', 'groceries.csv')
DEFAULT_DELIMITER = ','

COUNTING_STRATEGIES = ('scan', 'bitset')
DEFAULT_COUNTING = 'scan'

ENV_MIN_SUPPORT = 'APRIORI_MIN_SUPPORT'
ENV_DATA_PATH = 'APRIORI_DATA_PATH'


def validate_min_support(value):
    """
    Check that a minimum support is a fraction in (0, 1].

    Args:
        value: Candidate threshold (int, float or numeric string)

    Returns:
        float: The validated threshold

    Raises:
        InvalidThresholdError: If the value is not numeric or outside (0, 1]
    """
    if isinstance(value, bool):
        raise InvalidThresholdError(f"Minimum support must be a number, got {value!r}")
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            raise InvalidThresholdError(f"Minimum support must be a number, got {value!r}") from None
    if not isinstance(value, numbers.Real):
        raise InvalidThresholdError(f"Minimum support must be a number, got {value!r}")
    value = float(value)
    if math.isnan(value) or not 0.0 < value <= 1.0:
        raise InvalidThresholdError(f"Minimum support must be in (0, 1], got {value}")
    return value


def validate_max_length(value):
    """Return a positive int or None for the itemset size cap."""
    if value is None:
        return None
    if isinstance(value, bool) or not isinstance(value, numbers.Integral) or value < 1:
        raise ValueError(f"max_length must be a positive integer or None, got {value!r}")
    return int(value)


def load_settings(environ=None):
    """
    Build the runtime settings, applying environment overrides.

    Args:
        environ (dict): Mapping to read overrides from (defaults to os.environ)

    Returns:
        dict: Settings with 'min_support', 'data_path', 'delimiter' and 'counting'
    """
    environ = os.environ if environ is None else environ
    settings = {
        'min_support': DEFAULT_MIN_SUPPORT,
        'data_path': DEFAULT_DATA_PATH,
        'delimiter': DEFAULT_DELIMITER,
        'counting': DEFAULT_COUNTING,
    }
    if environ.get(ENV_MIN_SUPPORT):
        settings['min_support'] = validate_min_support(environ[ENV_MIN_SUPPORT])
        logger.info(f"Using min_support={settings['min_support']} from {ENV_MIN_SUPPORT}")
    if environ.get(ENV_DATA_PATH):
        settings['data_path'] = environ[ENV_DATA_PATH]
        logger.info(f"Using data path {settings['data_path']} from {ENV_DATA_PATH}")
    return settings
