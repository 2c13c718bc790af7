"""
Custom Exceptions

Defines custom exception classes for the AutoShift policy generator.
"""


class PolicyGeneratorError(Exception):
    """Base exception class for policy generator errors"""
    pass


class ArgumentValidationError(PolicyGeneratorError):
    """Raised when command-line input is missing or malformed"""
    pass


class ConfigurationError(PolicyGeneratorError):
    """Raised when configuration is invalid or missing"""
    pass


class PreconditionError(PolicyGeneratorError):
    """Raised when the filesystem is not in a state that allows generation"""
    pass


class TemplateError(PolicyGeneratorError):
    """Raised when a template cannot be read or rendered"""
    pass


class ChartValidationError(PolicyGeneratorError):
    """Raised when a generated chart fails helm or YAML validation"""
    pass


class ValuesDocumentError(PolicyGeneratorError):
    """Raised when a values document cannot be read, written or verified"""
    pass
