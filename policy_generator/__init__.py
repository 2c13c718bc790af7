"""
AutoShift Policy Generator

Scaffolds RHACM operator installation policy charts for the AutoShift GitOps
model and enables them in AutoShift values files.
"""

__version__ = "1.0.0"
__author__ = "AutoShift Project"

from .libs import (
    # Core
    ConfigManager, GeneratorSettings, PolicyDescriptor,
    PolicyGeneratorError, ArgumentValidationError, ConfigurationError,
    PreconditionError, TemplateError, ChartValidationError, ValuesDocumentError,
    OperatorConstants, ChartConstants, ValuesConstants, FileConstants, ErrorMessages,
    # Chart
    TemplateEngine, ChartGenerator, ChartValidator,
    # Values
    ValuesDocument, LabelBlock, LabelInserter, InsertionStatus,
    AutoShiftValuesUpdater, ValuesFileReport,
    # Main
    HelpManager, PolicyGenerator, main
)

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
