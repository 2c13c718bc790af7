"""
Configuration Management

Handles loading configuration files and building the immutable settings and
policy descriptor records used by the generator.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Any, Optional, Tuple

import yaml

from .exceptions import ConfigurationError
from .constants import (
    ChartConstants, ErrorMessages, OperatorConstants, ValuesConstants
)
from .utils import parse_csv_list, to_camel_case

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PolicyDescriptor:
    """Everything needed to render one operator policy chart"""

    component: str
    subscription: str
    channel: str
    namespace: str
    source: str = OperatorConstants.DEFAULT_SOURCE
    source_namespace: str = OperatorConstants.DEFAULT_SOURCE_NAMESPACE
    version: Optional[str] = None
    namespace_scoped: bool = False

    @property
    def component_camel(self) -> str:
        return to_camel_case(self.component)

    @property
    def policy_file_name(self) -> str:
        return ChartConstants.POLICY_FILE_PATTERN.format(component=self.component)

    def placeholders(self) -> Dict[str, str]:
        """
        Placeholder values keyed by token name.

        An unset version renders as an empty string.
        """
        token = OperatorConstants.Placeholder
        return {
            str(token.COMPONENT_NAME): self.component,
            str(token.SUBSCRIPTION_NAME): self.subscription,
            str(token.NAMESPACE): self.namespace,
            str(token.SOURCE): self.source,
            str(token.SOURCE_NAMESPACE): self.source_namespace,
            str(token.CHANNEL): self.channel,
            str(token.VERSION): self.version or "",
            str(token.COMPONENT_CAMEL): self.component_camel,
        }


@dataclass(frozen=True)
class GeneratorSettings:
    """Run-wide settings resolved from CLI flags and the config file"""

    repo_root: Path = field(default_factory=Path.cwd)
    policies_dir: str = ChartConstants.DEFAULT_POLICIES_DIR
    values_dir: str = ValuesConstants.DEFAULT_VALUES_DIR
    templates_dir: Optional[Path] = None
    add_to_autoshift: bool = False
    values_files: Tuple[str, ...] = ()
    show_integration: bool = False
    debug: bool = False

    @property
    def template_path(self) -> Path:
        """Directory holding the *.template files (bundled ones by default)"""
        if self.templates_dir is not None:
            return Path(self.templates_dir)
        return Path(__file__).resolve().parent.parent.parent / ChartConstants.TEMPLATES_SUBDIR

    @property
    def values_path(self) -> Path:
        return Path(self.repo_root) / self.values_dir

    def chart_path(self, component: str) -> Path:
        return Path(self.repo_root) / self.policies_dir / component


class ConfigManager:
    """Manages configuration loading and validation"""

    # Configuration schema - defines expected structure and types
    CONFIG_SCHEMA = {
        'operator': {
            'type': dict,
            'required': False,
            'fields': {
                'channel': {'type': str, 'required': False},
                'namespace': {'type': str, 'required': False},
                'source': {'type': str, 'required': False},
                'sourceNamespace': {'type': str, 'required': False},
                'version': {'type': str, 'required': False},
                'namespaceScoped': {'type': bool, 'required': False}
            }
        },
        'autoshift': {
            'type': dict,
            'required': False,
            'fields': {
                'addToAutoshift': {'type': bool, 'required': False},
                'valuesFiles': {'type': (list, str), 'required': False},
                'showIntegration': {'type': bool, 'required': False}
            }
        },
        'paths': {
            'type': dict,
            'required': False,
            'fields': {
                'policiesDir': {'type': str, 'required': False},
                'valuesDir': {'type': str, 'required': False},
                'templatesDir': {'type': str, 'required': False}
            }
        },
        'global': {
            'type': dict,
            'required': False,
            'fields': {
                'debug': {'type': bool, 'required': False}
            }
        },
    }

    def __init__(self):
        """Initialize configuration manager"""
        self.config_data = {}
        self.config_file_path = None

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """
        Load configuration from YAML file

        Args:
            config_path: Path to configuration file

        Returns:
            Dict containing configuration data

        Raises:
            ConfigurationError: If configuration file cannot be loaded or is invalid
        """
        config_file = Path(config_path)

        if not config_file.exists():
            raise ConfigurationError(
                str(ErrorMessages.ConfigError.CONFIG_FILE_NOT_FOUND).format(config_path=config_path)
            )

        if not config_file.is_file():
            raise ConfigurationError(f"Configuration path is not a file: {config_path}")

        try:
            with open(config_file, 'r') as f:
                self.config_data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in configuration file {config_path}: {e}")
        except OSError as e:
            raise ConfigurationError(f"Failed to load configuration from {config_path}: {e}")

        self.config_file_path = config_path
        logger.info(f"Successfully loaded configuration from {config_path}")

        self._validate_config()

        return self.config_data

    def _validate_config(self) -> None:
        """
        Validate configuration structure and values

        Raises:
            ConfigurationError: If configuration is invalid
        """
        if not isinstance(self.config_data, dict):
            raise ConfigurationError("Configuration must be a dictionary")

        self._validate_against_schema(self.config_data, self.CONFIG_SCHEMA, "config")

    def _validate_against_schema(self, data: Dict[str, Any], schema: Dict[str, Any], path: str = "") -> None:
        """
        Validate data against schema definition

        Args:
            data: Data to validate
            schema: Schema definition
            path: Current path for error reporting

        Raises:
            ConfigurationError: If data doesn't match schema
        """
        for key, field_schema in schema.items():
            current_path = f"{path}.{key}" if path else key

            if key in data:
                value = data[key]

                # Skip None values for optional fields
                if value is None and not field_schema.get('required', False):
                    continue

                expected_type = field_schema['type']
                if not isinstance(value, expected_type):
                    if isinstance(expected_type, tuple):
                        type_name = ' or '.join(t.__name__ for t in expected_type)
                    else:
                        type_name = expected_type.__name__
                    raise ConfigurationError(f"{current_path} must be a {type_name}")

                # Recursively validate nested dictionaries
                if expected_type == dict and 'fields' in field_schema:
                    self._validate_against_schema(value, field_schema['fields'], current_path)

            elif field_schema.get('required', False):
                raise ConfigurationError(f"Required field {current_path} is missing")


def merge_config_with_args(args, config: Optional[Dict[str, Any]]) -> None:
    """
    Merge configuration file values with command-line arguments.

    Updates the args object in place, but only for attributes that were not
    provided on the command line (None, empty string or False).

    Args:
        args: Parsed command-line arguments object
        config: Loaded configuration dictionary
    """
    if not config:
        return

    section_mappings = {
        'operator': {
            'channel': 'channel',
            'namespace': 'namespace',
            'source': 'source',
            'sourceNamespace': 'source_namespace',
            'version': 'version',
            'namespaceScoped': 'namespace_scoped',
        },
        'autoshift': {
            'addToAutoshift': 'add_to_autoshift',
            'valuesFiles': 'values_files',
            'showIntegration': 'show_integration',
        },
        'paths': {
            'policiesDir': 'policies_dir',
            'valuesDir': 'values_dir',
            'templatesDir': 'templates_dir',
        },
        'global': {
            'debug': 'debug',
        },
    }

    for section, mapping in section_mappings.items():
        section_config = config.get(section) or {}
        for config_key, arg_name in mapping.items():
            config_value = section_config.get(config_key)
            if config_value is None or not hasattr(args, arg_name):
                continue

            current_value = getattr(args, arg_name)
            # Command-line arguments take precedence
            if current_value is None or current_value == '' or current_value is False:
                setattr(args, arg_name, config_value)
                logger.debug(f"Using {section}.{config_key} from configuration file")


def build_descriptor(args) -> PolicyDescriptor:
    """Build the policy descriptor from merged arguments"""
    return PolicyDescriptor(
        component=args.component_name,
        subscription=args.subscription_name,
        channel=args.channel,
        namespace=args.namespace,
        source=args.source or OperatorConstants.DEFAULT_SOURCE,
        source_namespace=args.source_namespace or OperatorConstants.DEFAULT_SOURCE_NAMESPACE,
        version=args.version or None,
        namespace_scoped=bool(args.namespace_scoped),
    )


def build_settings(args) -> GeneratorSettings:
    """Build the run-wide settings from merged arguments"""
    return GeneratorSettings(
        repo_root=Path(args.repo_root) if args.repo_root else Path.cwd(),
        policies_dir=args.policies_dir or ChartConstants.DEFAULT_POLICIES_DIR,
        values_dir=args.values_dir or ValuesConstants.DEFAULT_VALUES_DIR,
        templates_dir=Path(args.templates_dir) if args.templates_dir else None,
        add_to_autoshift=bool(args.add_to_autoshift),
        values_files=tuple(parse_csv_list(args.values_files)),
        show_integration=bool(args.show_integration),
        debug=bool(args.debug),
    )
