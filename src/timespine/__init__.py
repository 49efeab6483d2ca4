"""
time-spine - Round-trip-validated calendar resolution.

- timespine.core: units, components, calendars, engine, resolver
"""

__version__ = "0.1.0"

from timespine.core import *  # noqa
from timespine.core import __all__  # noqa: F401
