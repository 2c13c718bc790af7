"""
Core Utilities

Common utility functions used across the AutoShift policy generator.
"""

import logging
import os
import re
import sys
import tempfile
from pathlib import Path
from typing import Optional, Union

from .exceptions import ArgumentValidationError, ConfigurationError
from .constants import ErrorMessages, FileConstants, OperatorConstants


def setup_logging(debug: bool = False) -> None:
    """
    Set up logging configuration for the application.
    Separates WARNING/INFO to stdout and ERROR to stderr.

    Args:
        debug: Enable debug logging level
    """
    level = logging.DEBUG if debug else logging.INFO

    # Configure root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    # Remove existing handlers to avoid duplicates
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    formatter = logging.Formatter(
        '%(asctime)s - %(levelname)s - %(message)s',
        datefmt='%Y-%m-%d %H:%M:%S'
    )

    # INFO, WARNING, DEBUG go to stdout
    stdout_handler = logging.StreamHandler(sys.stdout)
    stdout_handler.setLevel(level)
    stdout_handler.setFormatter(formatter)
    stdout_handler.addFilter(lambda record: record.levelno < logging.ERROR)

    # ERROR and CRITICAL only
    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.ERROR)
    stderr_handler.setFormatter(formatter)

    root_logger.addHandler(stdout_handler)
    root_logger.addHandler(stderr_handler)

    if debug:
        logger = logging.getLogger(__name__)
        logger.debug("Debug mode enabled")


class ValidationConfig:
    """
    Configuration-driven validation patterns.

    Centralizes validation patterns, error messages, and constraints
    so the individual validators stay one-liners.
    """

    COMPONENT_NAME = {
        'pattern': OperatorConstants.COMPONENT_NAME_PATTERN,
        'error': ErrorMessages.ArgumentError.INVALID_COMPONENT_NAME,
        'name': 'Component',
        'exception': ArgumentValidationError,
        'description': 'Kebab-case component name (cert-manager, metallb)'
    }

    NAMESPACE = {
        'pattern': r'^[a-z0-9]([-a-z0-9]*[a-z0-9])?$',
        'error': ErrorMessages.ConfigError.INVALID_NAMESPACE,
        'name': 'Namespace',
        'exception': ArgumentValidationError,
        'max_length': 63,
        'description': 'Kubernetes namespace (lowercase alphanumeric with hyphens)'
    }


def _validate_with_config(value: str, config: dict) -> bool:
    """
    Generic validation using configuration-driven approach.

    Args:
        value: The string to validate
        config: Validation configuration dictionary

    Returns:
        bool: True if validation passes

    Raises:
        ArgumentValidationError: If validation fails
    """
    exception_class = config.get('exception', ConfigurationError)
    _validate_input(value, config['pattern'], str(config['error']), config['name'], exception_class)

    if 'max_length' in config and len(value) > config['max_length']:
        raise exception_class(
            f"{config['name']} too long (max {config['max_length']} chars): {value}"
        )

    return True


def _validate_input(value: str, pattern: str, error_template: str, name: str,
                    exception_class: type = ConfigurationError) -> bool:
    """
    Private helper function to validate input against a regex pattern.

    Args:
        value: The string to validate
        pattern: The regex pattern to match against
        error_template: Error message template from ErrorMessages enum
        name: The name of the field being validated (for error messages)
        exception_class: Exception raised on failure

    Returns:
        bool: True if validation passes
    """
    if not value or not isinstance(value, str):
        raise exception_class(str(ErrorMessages.ArgumentError.EMPTY_VALUE).format(name=name))

    if not re.match(pattern, value):
        raise exception_class(error_template.format(**{name.lower(): value}))

    return True


def validate_component_name(component: str) -> bool:
    """
    Validate a kebab-case component name.

    Raises:
        ArgumentValidationError: If the name has uppercase letters, underscores
            or anything else outside [a-z0-9-]
    """
    return _validate_with_config(component, ValidationConfig.COMPONENT_NAME)


def validate_namespace(namespace: str) -> bool:
    """
    Validate if the provided string is a valid Kubernetes namespace.

    Args:
        namespace: Kubernetes namespace to validate

    Returns:
        bool: True if valid namespace

    Raises:
        ArgumentValidationError: If namespace is invalid
    """
    return _validate_with_config(namespace, ValidationConfig.NAMESPACE)


def to_camel_case(kebab: str) -> str:
    """Convert kebab-case to camelCase (cert-manager -> certManager)"""
    return re.sub(r'-([a-z])', lambda match: match.group(1).upper(), kebab)


def parse_csv_list(value: Optional[Union[str, list]]) -> list:
    """
    Split a comma-separated option into trimmed, non-empty items.

    Lists (as loaded from a config file) are trimmed the same way.
    """
    if not value:
        return []
    items = value.split(',') if isinstance(value, str) else value
    return [str(item).strip() for item in items if str(item).strip()]


def atomic_write(path: Union[str, Path], content: str) -> None:
    """
    Replace a file's content through a temporary sibling and a rename.

    The original file is untouched until the rename succeeds.

    Args:
        path: File to write
        content: Complete new file content

    Raises:
        OSError: If the temporary file cannot be written or renamed
    """
    target = Path(path)
    fd, temp_path = tempfile.mkstemp(
        dir=str(target.parent), prefix=f".{target.name}.", suffix=FileConstants.TEMP_FILE_SUFFIX
    )
    try:
        with os.fdopen(fd, 'w', encoding=FileConstants.ENCODING, newline='') as f:
            f.write(content)
        if target.exists():
            os.chmod(temp_path, target.stat().st_mode & 0o777)
        os.replace(temp_path, target)
    except BaseException:
        if os.path.exists(temp_path):
            os.unlink(temp_path)
        raise


def create_user_friendly_error(error_type: str, details: str, suggestions: Optional[list] = None) -> str:
    """
    Create a user-friendly error message with suggestions

    Args:
        error_type: Type of error (e.g., "Validation Error")
        details: Detailed error description
        suggestions: List of suggested solutions

    Returns:
        str: Formatted error message
    """
    message = f"{error_type}: {details}"

    if suggestions:
        message += "\n\nSuggested solutions:"
        for i, suggestion in enumerate(suggestions, 1):
            message += f"\n  {i}. {suggestion}"

    return message
