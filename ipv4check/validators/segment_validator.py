"""Checks the four dot-separated segments of a candidate address.

This gate splits the candidate on every dot without dropping empty pieces,
so a leading dot, a trailing dot or two consecutive dots all produce an
empty segment that is rejected here. Each segment must then be a canonical
decimal number between 0 and 255: no leading zeros except "0" itself, and
rendering the parsed value back to text must give the segment unchanged.
"""
from ..core.base_validator import BaseValidator
from ..core.ipv4 import (
    OCTET_COUNT,
    OCTET_MAX,
    REASON_EMPTY_SEGMENT,
    REASON_LEADING_ZERO,
    REASON_RANGE,
    check_octet,
    check_segment_count,
    split_octets,
)


class SegmentValidator(BaseValidator):
    """Validates segmentation and every octet of the candidate."""

    name = "Segments"
    category = "Octets"
    description = f"Checks for {OCTET_COUNT} non-empty octets in canonical decimal form between 0 and {OCTET_MAX}."
    order = 40

    def _validate(self) -> None:
        segments = split_octets(self.candidate)
        self.add_info("segments", segments)

        reason = check_segment_count(segments)
        if reason:
            self.add_error(
                f"Found {len(segments)} segments; expected exactly {OCTET_COUNT}.",
                reason=reason,
            )
            return

        for index, segment in enumerate(segments, start=1):
            reason = check_octet(segment)
            if reason:
                self.add_error(self._describe(index, segment, reason), reason=reason)
                return

        self.add_info("octets", [int(segment) for segment in segments])

    @staticmethod
    def _describe(index: int, segment: str, reason: str) -> str:
        if reason == REASON_EMPTY_SEGMENT:
            return f"Octet {index} is empty."
        if reason == REASON_LEADING_ZERO:
            return f"Octet {index} ({segment!r}) has a leading zero."
        if reason == REASON_RANGE:
            return f"Octet {index} ({segment!r}) is outside the range 0-{OCTET_MAX}."
        return f"Octet {index} ({segment!r}) is not a canonical decimal number."
