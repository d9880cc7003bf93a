"""Checks that a candidate only contains ASCII digits and dots."""
from ..core.base_validator import BaseValidator
from ..core.ipv4 import ALLOWED_CHARS, check_charset


class CharsetValidator(BaseValidator):
    """Rejects letters, signs, whitespace and non-ASCII characters."""

    name = "Charset"
    category = "Syntax"
    description = "Checks that the address only contains the digits 0-9 and dots."
    order = 20

    def _validate(self) -> None:
        reason = check_charset(self.candidate)
        if not reason:
            return

        position, char = next(
            (i, c) for i, c in enumerate(self.candidate) if c not in ALLOWED_CHARS
        )
        self.add_error(
            f"Unexpected character {char!r} at position {position}; "
            f"only digits and dots are allowed.",
            reason=reason,
        )
        if self.candidate != self.candidate.strip():
            self.add_warning("Surrounding whitespace is not trimmed before validation.")
