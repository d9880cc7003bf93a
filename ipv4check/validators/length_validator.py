"""Checks the overall length of a candidate address.

The shortest dotted-decimal address is "0.0.0.0" (7 characters) and the
longest is "255.255.255.255" (15 characters). Anything outside that range is
rejected before its content is looked at.
"""
from ..core.base_validator import BaseValidator
from ..core.ipv4 import MAX_LENGTH, MIN_LENGTH, check_length


class LengthValidator(BaseValidator):
    """Rejects candidates outside the 7-15 character range."""

    name = "Length"
    category = "Structure"
    description = f"Checks that the address is {MIN_LENGTH} to {MAX_LENGTH} characters long."
    order = 10

    def _validate(self) -> None:
        length = len(self.candidate)
        self.add_info("length", length)

        reason = check_length(self.candidate)
        if reason:
            self.add_error(
                f"Address is {length} characters long; expected between "
                f"{MIN_LENGTH} and {MAX_LENGTH}.",
                reason=reason,
            )
