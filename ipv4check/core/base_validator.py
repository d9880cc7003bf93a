"""
Base validator class that all address gates inherit from.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional, TYPE_CHECKING

if TYPE_CHECKING:
    from .config import Config

logger = logging.getLogger(__name__)


class BaseValidator(ABC):
    """Abstract base class for all address gate validators.

    All validators must inherit from this class and implement the `_validate`
    method. The pipeline in `ipv4check.core.validator` runs the discovered
    subclasses in ascending `order` and stops at the first one that reports
    an error, mirroring the short-circuit behaviour of `is_valid_ipv4`.

    Attributes:
        name (str): The display name of the validator.
        category (str): A category for grouping validators (e.g., "Syntax").
        description (str): A brief explanation of what the validator checks.
        order (int): Position of the gate in the pipeline.
    """

    name: str = "UnnamedValidator"
    category: str = "General"
    description: str = "No description provided"
    order: int = 100

    def __init__(self, candidate: str, config: Optional["Config"] = None) -> None:
        """Initializes the validator with the candidate address.

        Args:
            candidate (str): The address text being validated. It is never
                modified.
            config (Optional[Config]): The application's configuration
                object. Gates must not let it change their verdict.
        """
        self.candidate = candidate
        self.config = config
        self.errors: List[str] = []
        self.warnings: List[str] = []
        self.info: Dict[str, Any] = {}
        self.reason: Optional[str] = None

    def validate(self) -> Dict[str, Any]:
        """Performs the validation check and returns the results.

        This method wraps the internal `_validate` method so that an
        unexpected exception is recorded as a failure of this gate instead
        of escaping to the caller.

        Returns:
            Dict[str, Any]: A dictionary containing the validation results.
        """
        try:
            self._validate()
        except Exception as e:
            logger.exception(f"Validator {self.name} failed on {self.candidate!r}")
            self.add_error(f"Validator {self.name} failed: {str(e)}", reason="internal")
        return self.result()

    @abstractmethod
    def _validate(self) -> None:
        """Abstract method for implementing the gate logic.

        Subclasses must override this method and record a rejection with
        `add_error`, passing the reason code of the broken rule.
        """
        raise NotImplementedError("Subclasses must implement _validate()")

    @property
    def passed(self) -> bool:
        return not self.errors

    def result(self) -> Dict[str, Any]:
        """Returns the validation results in a standardized dictionary format.

        Returns:
            Dict[str, Any]: A dictionary containing the validator's name,
            category, description, reason code and any findings.
        """
        return {
            "name": self.name,
            "category": self.category,
            "description": self.description,
            "errors": self.errors,
            "warnings": self.warnings,
            "info": self.info,
            "reason": self.reason,
        }

    def add_error(self, message: str, reason: Optional[str] = None) -> None:
        """Adds an error message to the validation results.

        An error means the candidate is not a valid IPv4 address. The first
        reason code recorded is kept.

        Args:
            message (str): The error message to add.
            reason (Optional[str]): The reason code of the broken rule.
        """
        self.errors.append(message)
        if self.reason is None:
            self.reason = reason

    def add_warning(self, message: str) -> None:
        """Adds a warning message to the validation results.

        Warnings never affect the verdict.

        Args:
            message (str): The warning message to add.
        """
        self.warnings.append(message)

    def add_info(self, key: str, value: Any) -> None:
        """Adds informational data to the validation results.

        Args:
            key (str): The key for the informational data.
            value (Any): The value of the informational data.
        """
        self.info[key] = value
