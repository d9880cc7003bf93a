"""Checks that a candidate separates its octets with exactly three dots."""
from ..core.base_validator import BaseValidator
from ..core.ipv4 import DOT_COUNT, SEPARATOR, check_dot_count


class DotCountValidator(BaseValidator):
    """Rejects candidates with too few or too many dots."""

    name = "DotCount"
    category = "Structure"
    description = f"Checks that the address contains exactly {DOT_COUNT} dots."
    order = 30

    def _validate(self) -> None:
        dots = self.candidate.count(SEPARATOR)
        self.add_info("dots", dots)

        reason = check_dot_count(self.candidate)
        if reason:
            self.add_error(f"Found {dots} dots; expected exactly {DOT_COUNT}.", reason=reason)
