"""
Main Application

Orchestrates chart generation, validation and AutoShift values integration
for a single operator policy.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

# Core libraries
from .core import ConfigManager, setup_logging
from .core.config import (
    GeneratorSettings, PolicyDescriptor, build_descriptor, build_settings,
    merge_config_with_args
)
from .core.constants import ChartConstants, ErrorMessages, FileConstants, OperatorConstants
from .core.exceptions import (
    ArgumentValidationError, ChartValidationError, PolicyGeneratorError, ValuesDocumentError
)
from .core.protocols import (
    ChartProvider, ConfigProvider, HelpProvider, ValidationProvider, ValuesProvider
)
from .core.utils import create_user_friendly_error, validate_component_name, validate_namespace

# Chart and values libraries
from .chart import ChartGenerator, ChartValidator
from .values import AutoShiftValuesUpdater

from .help_manager import HelpManager

logger = logging.getLogger(__name__)

USAGE = (
    "Usage: generate-operator-policy <component-name> <subscription-name> "
    "--channel <channel> --namespace <namespace> [options]\n"
    "Use --help for the full option list."
)


class PolicyGenerator:
    """Main application orchestrator for the AutoShift policy generator"""

    def __init__(
        self,
        descriptor: PolicyDescriptor,
        settings: GeneratorSettings,
        chart_provider: Optional[ChartProvider] = None,
        validation_provider: Optional[ValidationProvider] = None,
        values_provider: Optional[ValuesProvider] = None
    ):
        """
        Initialize policy generator with dependency injection

        Args:
            descriptor: Operator policy to generate
            settings: Run-wide settings
            chart_provider: Chart generator (defaults to ChartGenerator)
            validation_provider: Chart validator (defaults to ChartValidator)
            values_provider: Values updater (defaults to AutoShiftValuesUpdater)
        """
        self.descriptor = descriptor
        self.settings = settings

        self.chart_generator = chart_provider or ChartGenerator(descriptor, settings)
        self.validator = validation_provider or ChartValidator()
        self.values_updater = values_provider or AutoShiftValuesUpdater(descriptor, settings)

    @property
    def policy_dir(self) -> str:
        return f"{self.settings.policies_dir}/{self.descriptor.component}"

    def generate(self) -> Path:
        """
        Render the chart directory

        Raises:
            PreconditionError: If the chart directory already exists or the
                templates are missing
        """
        print(f"Generating AutoShift policy for {self.descriptor.component}...")
        print()
        chart_dir = self.chart_generator.generate()
        print(f"✓ Created {self.policy_dir}/")
        return chart_dir

    def validate(self, chart_dir: Path) -> bool:
        """Validate the rendered chart (ChartValidationError on failure)"""
        return self.validator.validate(chart_dir)

    def add_to_autoshift(self) -> bool:
        """
        Enable the policy in the selected AutoShift values files

        Returns:
            bool: False when no values file could be updated
        """
        try:
            reports = self.values_updater.update_all(self.settings.values_files)
        except ValuesDocumentError as e:
            logger.error(str(e))
            return False

        failed = [report for report in reports if report.error]
        if failed and len(failed) == len(reports):
            return False

        print("✓ Policy integrated with AutoShift values files")
        return True

    def run(self) -> int:
        """
        Execute the full generation workflow

        Returns:
            int: Process exit code
        """
        chart_dir = self.generate()

        try:
            self.validate(chart_dir)
        except ChartValidationError as e:
            logger.error(str(e))
            print("✗ Policy generation failed validation", file=sys.stderr)
            return 1

        print()
        print("✓ Policy generation completed successfully!")
        self.print_next_steps()

        if self.settings.add_to_autoshift:
            print()
            if self.add_to_autoshift():
                print()
                print("Integration Complete!")
                print("Your policy is now enabled in AutoShift. Deploy AutoShift to apply changes.")
            else:
                logger.warning("Failed to add labels to values files")
                print()
                print("Manual Integration Required:")
                self.show_integration_instructions()

        if self.settings.show_integration:
            self.show_integration_instructions()

        return 0

    def print_next_steps(self) -> None:
        """Print the follow-up checklist for a freshly generated chart"""
        print()
        print("Next Steps:")
        print(f"1. Review generated files in {self.policy_dir}/")
        print(f"2. Test locally: helm template {self.policy_dir}/")
        print("3. Customize values.yaml if needed")
        print("4. Add to AutoShift ApplicationSet (see --show-integration)")
        print("5. Add operator-specific configuration policies")
        print()
        print(f"See {self.policy_dir}/{ChartConstants.OutputFile.README} for detailed configuration guidance")

    def show_integration_instructions(self) -> None:
        """Print the ApplicationSet snippet for manual integration"""
        component = self.descriptor.component
        print()
        print("AutoShift Integration Instructions:")
        print()
        print(f"To add this policy to AutoShift, edit {FileConstants.APPLICATIONSET_FILE} and add:")
        print()
        print(f"    - name: {component}")
        print(f"      path: {self.policy_dir}")
        print("      helm:")
        print("        valueFiles:")
        print(f"        - {ChartConstants.OutputFile.VALUES}")
        print()
        print("Then deploy AutoShift to make the policy available across your clusters.")
        print()


# Factory function for easy creation
def create_policy_generator(descriptor: PolicyDescriptor, settings: GeneratorSettings) -> PolicyGenerator:
    """
    Factory function to create PolicyGenerator with default dependencies

    Args:
        descriptor: Operator policy to generate
        settings: Run-wide settings

    Returns:
        PolicyGenerator: Configured instance
    """
    return PolicyGenerator(descriptor, settings)


class PolicyArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that reports usage errors with exit code 1"""

    def error(self, message):
        print(f"Error: {message}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)


def create_argument_parser() -> argparse.ArgumentParser:
    """Create and configure the argument parser"""
    parser = PolicyArgumentParser(
        prog='generate-operator-policy',
        description='AutoShift Operator Policy Generator - scaffold RHACM operator install policies',
        add_help=False  # Disable default help to override behavior
    )

    parser.add_argument(
        '-h', '--help',
        action='store_true',
        help='Show this help message and exit'
    )
    parser.add_argument(
        '--examples', action='store_true',
        help='Show usage examples'
    )
    parser.add_argument(
        'positionals', nargs='*', metavar='ARG',
        help='<component-name> <subscription-name>'
    )

    operator_group = parser.add_argument_group('operator')
    operator_group.add_argument('--channel', help='Operator channel')
    operator_group.add_argument('--namespace', help='Target namespace for operator installation')
    operator_group.add_argument('--source', help=f'Catalog source (default: {OperatorConstants.DEFAULT_SOURCE})')
    operator_group.add_argument(
        '--source-namespace',
        help=f'Catalog source namespace (default: {OperatorConstants.DEFAULT_SOURCE_NAMESPACE})'
    )
    operator_group.add_argument('--version', help='Pin to a specific operator version (CSV name)')
    operator_group.add_argument(
        '--namespace-scoped', action='store_true',
        help='Enable targetNamespaces for namespace-scoped operators'
    )

    autoshift_group = parser.add_argument_group('autoshift')
    autoshift_group.add_argument(
        '--add-to-autoshift', action='store_true',
        help='Add labels to AutoShift values files'
    )
    autoshift_group.add_argument(
        '--values-files',
        help="Comma-separated values file prefixes to update (e.g. 'hub,sbx')"
    )
    autoshift_group.add_argument(
        '--show-integration', action='store_true',
        help='Show manual integration instructions'
    )

    common_group = parser.add_argument_group('common')
    common_group.add_argument('--config', help='Configuration file path')
    common_group.add_argument('--repo-root', help='AutoShift repository root (default: cwd)')
    common_group.add_argument('--templates-dir', help='Directory with *.template files')
    common_group.add_argument('--debug', action='store_true', help='Enable debug logging')

    # Only settable from the configuration file
    parser.set_defaults(policies_dir=None, values_dir=None)

    return parser


def handle_early_exit_flags(args, help_manager: Optional[HelpProvider] = None) -> bool:
    """Handle early-exit flags like --help and --examples"""
    help_manager = help_manager or HelpManager()

    if args.help:
        help_manager.show_help()
        return True

    if args.examples:
        help_manager.show_examples()
        return True

    return False


def load_and_merge_configuration(args, config_provider: Optional[ConfigProvider] = None):
    """Load configuration file and merge with command-line arguments"""
    config = None
    if args.config:
        config_manager = config_provider or ConfigManager()
        config = config_manager.load_config(args.config)
        merge_config_with_args(args, config)
    return config


def split_positionals(args) -> None:
    """
    Assign component and subscription names from the positional arguments

    Raises:
        ArgumentValidationError: If too few or too many were given
    """
    positionals = args.positionals or []

    if len(positionals) > 2:
        raise ArgumentValidationError(
            str(ErrorMessages.ArgumentError.TOO_MANY_POSITIONAL).format(extra=' '.join(positionals[2:]))
        )

    args.component_name = positionals[0] if len(positionals) > 0 else None
    args.subscription_name = positionals[1] if len(positionals) > 1 else None


def validate_arguments(args) -> None:
    """
    Validate merged arguments before anything touches the filesystem

    Raises:
        ArgumentValidationError: On the first missing or malformed value
    """
    if not args.component_name or not args.subscription_name:
        raise ArgumentValidationError(str(ErrorMessages.ArgumentError.MISSING_POSITIONAL))

    if not args.channel:
        raise ArgumentValidationError(str(ErrorMessages.ArgumentError.MISSING_CHANNEL))

    if not args.namespace:
        raise ArgumentValidationError(str(ErrorMessages.ArgumentError.MISSING_NAMESPACE))

    validate_component_name(args.component_name)
    validate_namespace(args.namespace)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point with unified execution flow"""
    # Step 1: Parse arguments (unknown flags exit with code 1)
    parser = create_argument_parser()
    args = parser.parse_intermixed_args(argv)

    # Step 2: Handle early-exit flags like --help and --examples
    if handle_early_exit_flags(args):
        sys.exit(0)

    # Step 3: Set up logging early
    setup_logging(args.debug)

    try:
        # Step 4: Resolve positionals and merge the configuration file
        split_positionals(args)
        config = load_and_merge_configuration(args)
        if config and args.debug:
            setup_logging(True)

        # Step 5: Validate input before any filesystem mutation
        validate_arguments(args)

        # Step 6: Build immutable run records and execute
        descriptor = build_descriptor(args)
        settings = build_settings(args)
        generator = create_policy_generator(descriptor, settings)
        exit_code = generator.run()

    except ArgumentValidationError as e:
        print(f"Error: {e}", file=sys.stderr)
        print(USAGE, file=sys.stderr)
        sys.exit(1)
    except PolicyGeneratorError as e:
        logger.error(str(e))
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.")
        sys.exit(1)
    except Exception as e:
        logger.error(f"Unexpected error: {e}")
        print(create_user_friendly_error("Unexpected Error", str(e), [
            "Re-run with --debug for detailed logs",
            "Check that the repository root contains policies/ and autoshift/"
        ]), file=sys.stderr)
        sys.exit(1)

    sys.exit(exit_code)


if __name__ == "__main__":
    main()
