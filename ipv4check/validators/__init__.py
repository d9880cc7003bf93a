"""Gate validators for ipv4check.

This package contains one validator per gate of the IPv4 check. The modules
are discovered and run in ascending `order` by the validation pipeline in
`ipv4check.core.validator`. Each module should contain a class that inherits
from `ipv4check.core.base_validator.BaseValidator`.
"""
from .length_validator import LengthValidator
from .charset_validator import CharsetValidator
from .dot_count_validator import DotCountValidator
from .segment_validator import SegmentValidator
