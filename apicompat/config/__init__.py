"""Configuration constants for the compatibility engine.

Only static defaults live here; runtime values (timeouts, log level) are read
from the environment by :mod:`apicompat.base.timeouts` and
:mod:`apicompat.base.logging`.
"""

from .defaults import *  # noqa: F401,F403
from .defaults import __all__  # noqa: F401
