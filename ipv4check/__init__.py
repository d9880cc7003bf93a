"""ipv4check: A strict IPv4 address validator.

This package provides a predicate and a command-line tool that decide whether
a string is a canonical dotted-decimal IPv4 address: four octets between 0
and 255, separated by three dots, without leading zeros.
"""

from .core.ipv4 import find_violation, is_valid_ipv4, parse_ipv4

__version__ = "0.1.0"
__author__ = "Livrädo Sandoval"
__license__ = "MIT"

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "find_violation",
    "is_valid_ipv4",
    "parse_ipv4",
]
