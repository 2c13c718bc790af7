"""
AutoShift Policy Generator Library

Chart rendering, validation and values integration for AutoShift operator policies.
"""

__version__ = "1.0.0"
__author__ = "AutoShift Project"

# Core libraries
from .core import (
    ConfigManager, GeneratorSettings, PolicyDescriptor,
    PolicyGeneratorError, ArgumentValidationError, ConfigurationError,
    PreconditionError, TemplateError, ChartValidationError, ValuesDocumentError,
    OperatorConstants, ChartConstants, ValuesConstants, FileConstants, ErrorMessages
)

# Chart libraries
from .chart import TemplateEngine, ChartGenerator, ChartValidator

# Values libraries
from .values import (
    ValuesDocument, LabelBlock, LabelInserter, InsertionStatus,
    AutoShiftValuesUpdater, ValuesFileReport
)

# Main application and help
from .help_manager import HelpManager
from .main_app import PolicyGenerator, main

__all__ = [
    # Core
    'ConfigManager',
    'GeneratorSettings',
    'PolicyDescriptor',
    'PolicyGeneratorError',
    'ArgumentValidationError',
    'ConfigurationError',
    'PreconditionError',
    'TemplateError',
    'ChartValidationError',
    'ValuesDocumentError',
    'OperatorConstants',
    'ChartConstants',
    'ValuesConstants',
    'FileConstants',
    'ErrorMessages',
    # Chart
    'TemplateEngine',
    'ChartGenerator',
    'ChartValidator',
    # Values
    'ValuesDocument',
    'LabelBlock',
    'LabelInserter',
    'InsertionStatus',
    'AutoShiftValuesUpdater',
    'ValuesFileReport',
    # Main
    'HelpManager',
    'PolicyGenerator',
    'main'
]
