"""CLI helpers for CALLWIRE.

Utilities used by the command-line interface: logger-level option parsing,
``module:attr`` target loading, and message emitters that write to stderr
with emoji→ASCII fallbacks.
"""

from .log_level_parser import parse_log_level
from .messages import error, warn
from .targets import load_target_registry

__all__ = ["error", "load_target_registry", "parse_log_level", "warn"]
