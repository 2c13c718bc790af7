"""
Core Libraries

Shared functionality and utilities for the AutoShift policy generator.
"""

from .config import (
    ConfigManager, GeneratorSettings, PolicyDescriptor,
    build_descriptor, build_settings, merge_config_with_args
)
from .constants import (
    OperatorConstants, ChartConstants, ValuesConstants,
    FileConstants, ErrorMessages
)
from .exceptions import (
    PolicyGeneratorError, ArgumentValidationError, ConfigurationError,
    PreconditionError, TemplateError, ChartValidationError, ValuesDocumentError
)
from .protocols import (
    ConfigProvider, TemplateProvider, ChartProvider, ValidationProvider,
    ValuesProvider, HelpProvider
)
from .utils import (
    setup_logging, validate_component_name, validate_namespace,
    to_camel_case, parse_csv_list, atomic_write
)

__all__ = [
    # Main classes
    'ConfigManager',
    'GeneratorSettings',
    'PolicyDescriptor',
    'build_descriptor',
    'build_settings',
    'merge_config_with_args',
    # Constants
    'OperatorConstants',
    'ChartConstants',
    'ValuesConstants',
    'FileConstants',
    'ErrorMessages',
    # Exceptions
    'PolicyGeneratorError',
    'ArgumentValidationError',
    'ConfigurationError',
    'PreconditionError',
    'TemplateError',
    'ChartValidationError',
    'ValuesDocumentError',
    # Protocols
    'ConfigProvider',
    'TemplateProvider',
    'ChartProvider',
    'ValidationProvider',
    'ValuesProvider',
    'HelpProvider',
    # Utilities
    'setup_logging',
    'validate_component_name',
    'validate_namespace',
    'to_camel_case',
    'parse_csv_list',
    'atomic_write'
]
