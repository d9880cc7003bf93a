"""Handles the validation pipeline for ipv4check.

This module turns the boolean verdict of `is_valid_ipv4` into a report that
explains it:
1.  Discovering all available `BaseValidator` implementations.
2.  Running them in ascending `order` against a candidate address.
3.  Stopping at the first gate that reports an error.
4.  Aggregating the findings into a single address report.
"""

import os
import pkgutil
import inspect
import logging
from typing import Any, Dict, Iterable, List, Optional, Type

from .base_validator import BaseValidator
from .config import Config
from .ipv4 import REASON_TYPE, parse_ipv4
from .. import validators as validators_package

# Initialize a logger for this module.
logger = logging.getLogger(__name__)


def discover_validators() -> List[Type[BaseValidator]]:
    """Discovers all validator classes within the `ipv4check.validators` package.

    This function iterates through the modules in the `validators` package,
    inspects their members, and collects all classes that are subclasses of
    `BaseValidator` (excluding `BaseValidator` itself).

    Returns:
        List[Type[BaseValidator]]: The discovered validator classes, sorted
        by their `order` attribute.
    """
    validators = []
    path = os.path.dirname(validators_package.__file__)

    for _, name, _ in pkgutil.iter_modules([path]):
        try:
            module = __import__(f"ipv4check.validators.{name}", fromlist=["*"])
        except ImportError as e:
            logger.warning(f"Could not import validator module {name}: {e}")
            continue
        for _, item in inspect.getmembers(module, inspect.isclass):
            if issubclass(item, BaseValidator) and item is not BaseValidator and item not in validators:
                validators.append(item)
    return sorted(validators, key=lambda v: (v.order, v.name))


def _type_error_report(candidate: Any) -> Dict[str, Any]:
    message = f"Expected text, got {type(candidate).__name__}."
    return {
        "address": repr(candidate),
        "valid": False,
        "reason": REASON_TYPE,
        "errors": [message],
        "warnings": [],
        "octets": None,
        "validator_results": [],
    }


def check_address(
    candidate: Any,
    config: Optional[Config] = None,
    validator_classes: Optional[List[Type[BaseValidator]]] = None,
) -> Dict[str, Any]:
    """Runs the gate validators against a candidate and reports the outcome.

    Args:
        candidate (Any): The address text to validate. None is treated as an
            empty string.
        config (Optional[Config]): The application's configuration object,
            passed through to the validators.
        validator_classes (Optional[List[Type[BaseValidator]]]): The gates to
            run, in order. Defaults to `discover_validators()`.

    Returns:
        Dict[str, Any]: The address report, with the verdict, the reason code
        of the failing gate, aggregated messages and per-gate results.
    """
    if candidate is None:
        candidate = ""
    if not isinstance(candidate, str):
        logger.debug(f"Rejecting non-text candidate of type {type(candidate).__name__}")
        return _type_error_report(candidate)

    if validator_classes is None:
        validator_classes = discover_validators()

    validator_results = []
    reason = None
    for validator_class in validator_classes:
        validator = validator_class(candidate, config)
        result = validator.validate()
        validator_results.append(result)
        if not validator.passed:
            reason = validator.reason
            logger.debug(f"{candidate!r} rejected by {validator.name}: {reason}")
            break

    valid = reason is None and all(not res["errors"] for res in validator_results)
    if valid:
        logger.debug(f"{candidate!r} passed {len(validator_results)} gates")

    octets = parse_ipv4(candidate)
    return {
        "address": candidate,
        "valid": valid,
        "reason": reason,
        "errors": [err for res in validator_results for err in res.get("errors", [])],
        "warnings": [warn for res in validator_results for warn in res.get("warnings", [])],
        "octets": list(octets) if octets else None,
        "validator_results": validator_results,
    }


def check_addresses(candidates: Iterable[Any], config: Optional[Config] = None) -> List[Dict[str, Any]]:
    """Checks several candidates, discovering the validators only once.

    Args:
        candidates (Iterable[Any]): The address texts to validate.
        config (Optional[Config]): The application's configuration object.

    Returns:
        List[Dict[str, Any]]: One address report per candidate, in order.
    """
    validator_classes = discover_validators()
    logger.info(f"Running {len(validator_classes)} gates: {', '.join(v.name for v in validator_classes)}")
    return [check_address(c, config, validator_classes) for c in candidates]
