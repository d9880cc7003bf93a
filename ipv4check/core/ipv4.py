"""Pure IPv4 dotted-decimal validation.

This module holds the gates that decide whether a string is a canonical
dotted-decimal IPv4 address. Every function here is total: it accepts any
input and answers with a value, never an exception. Nothing in this module
logs or performs I/O, so it is safe to call from any thread.

A candidate is checked by a fixed sequence of gates:

1.  Length: between 7 ("0.0.0.0") and 15 ("255.255.255.255") characters.
2.  Character set: ASCII digits and dots only.
3.  Dot count: exactly three dots.
4.  Segmentation: exactly four dot-separated segments.
5.  Per segment: non-empty, no leading zero, value in 0-255, and the
    canonical rendering of the value equals the segment text.

The first failing gate determines the reason code returned by
`find_violation`.
"""

from typing import List, Optional, Tuple

MIN_LENGTH = 7
MAX_LENGTH = 15
DOT_COUNT = 3
OCTET_COUNT = 4
OCTET_MAX = 255

DIGITS = frozenset("0123456789")
SEPARATOR = "."
ALLOWED_CHARS = DIGITS | {SEPARATOR}

REASON_TYPE = "type"
REASON_LENGTH = "length"
REASON_CHARSET = "charset"
REASON_DOT_COUNT = "dot_count"
REASON_SEGMENT_COUNT = "segment_count"
REASON_EMPTY_SEGMENT = "empty_segment"
REASON_LEADING_ZERO = "leading_zero"
REASON_RANGE = "range"
REASON_ROUND_TRIP = "round_trip"


def check_length(candidate: str) -> Optional[str]:
    """Rejects candidates shorter than 7 or longer than 15 characters."""
    if MIN_LENGTH <= len(candidate) <= MAX_LENGTH:
        return None
    return REASON_LENGTH


def check_charset(candidate: str) -> Optional[str]:
    """Rejects any character other than an ASCII digit or a dot.

    Only ASCII digits count; superscripts and digits from other scripts
    are rejected.
    """
    if all(char in ALLOWED_CHARS for char in candidate):
        return None
    return REASON_CHARSET


def check_dot_count(candidate: str) -> Optional[str]:
    if candidate.count(SEPARATOR) == DOT_COUNT:
        return None
    return REASON_DOT_COUNT


def split_octets(candidate: str) -> List[str]:
    """Splits on every dot, keeping empty segments."""
    return candidate.split(SEPARATOR)


def check_segment_count(segments: List[str]) -> Optional[str]:
    if len(segments) == OCTET_COUNT:
        return None
    return REASON_SEGMENT_COUNT


def check_octet(segment: str) -> Optional[str]:
    """Validates a single segment as a canonical decimal octet.

    Args:
        segment (str): The text between two dot boundaries.

    Returns:
        Optional[str]: The reason code of the first rule the segment
        breaks, or None if it is a valid octet.
    """
    if not segment:
        return REASON_EMPTY_SEGMENT
    if len(segment) > 1 and segment[0] == "0":
        return REASON_LEADING_ZERO
    # int() tolerates signs, underscores, surrounding whitespace and
    # non-ASCII digits; the round-trip comparison below rejects those.
    try:
        value = int(segment, 10)
    except ValueError:
        return REASON_ROUND_TRIP
    if value < 0 or value > OCTET_MAX:
        return REASON_RANGE
    if str(value) != segment:
        return REASON_ROUND_TRIP
    return None


def find_violation(candidate) -> Optional[str]:
    """Returns the reason code of the first gate the candidate fails.

    Args:
        candidate: The text to validate. None is treated as an empty
            string; any other non-string value is rejected.

    Returns:
        Optional[str]: A reason code such as "length" or "leading_zero",
        or None if the candidate is a valid IPv4 address.
    """
    if candidate is None:
        candidate = ""
    if not isinstance(candidate, str):
        return REASON_TYPE

    for gate in (check_length, check_charset, check_dot_count):
        reason = gate(candidate)
        if reason:
            return reason

    segments = split_octets(candidate)
    reason = check_segment_count(segments)
    if reason:
        return reason

    for segment in segments:
        reason = check_octet(segment)
        if reason:
            return reason
    return None


def is_valid_ipv4(candidate) -> bool:
    """Checks whether a string is a canonical dotted-decimal IPv4 address.

    Example:
        >>> is_valid_ipv4("192.168.1.1")
        True
        >>> is_valid_ipv4("192.168.01.1")
        False
    """
    return find_violation(candidate) is None


def parse_ipv4(candidate) -> Optional[Tuple[int, int, int, int]]:
    """Returns the four octet values of a valid address, or None."""
    if not is_valid_ipv4(candidate):
        return None
    a, b, c, d = (int(segment) for segment in split_octets(candidate))
    return a, b, c, d
