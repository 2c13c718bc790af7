"""
Constants Module

Centralized constants for the AutoShift policy generator to eliminate magic
strings and improve maintainability.
"""

from enum import Enum


class BaseStrEnum(str, Enum):
    """Base enum class that inherits from str"""

    def __str__(self) -> str:
        """Return the enum value as string"""
        return self.value

    def __repr__(self) -> str:
        """Return a detailed representation of the enum"""
        return f"{self.__class__.__name__}.{self.name}"


class OperatorConstants:
    """Operator subscription defaults"""

    DEFAULT_SOURCE = "redhat-operators"
    DEFAULT_SOURCE_NAMESPACE = "openshift-marketplace"

    # Component names are kebab-case, they end up in label keys and paths
    COMPONENT_NAME_PATTERN = r'^[a-z0-9-]+$'

    class Placeholder(BaseStrEnum):
        """Tokens substituted into the chart templates"""
        COMPONENT_NAME = "COMPONENT_NAME"
        SUBSCRIPTION_NAME = "SUBSCRIPTION_NAME"
        NAMESPACE = "NAMESPACE"
        SOURCE = "SOURCE"
        SOURCE_NAMESPACE = "SOURCE_NAMESPACE"
        CHANNEL = "CHANNEL"
        VERSION = "VERSION"
        COMPONENT_CAMEL = "COMPONENT_CAMEL"


class ChartConstants:
    """Helm chart layout and template names"""

    DEFAULT_POLICIES_DIR = "policies"
    TEMPLATES_SUBDIR = "templates"
    POLICY_FILE_PATTERN = "policy-{component}-operator-install.yaml"

    # Escaped hub template marker expected in rendered policies
    HUB_ESCAPE_MARKER = '{{ "{{hub" }}'

    HELM_BINARY = "helm"

    class TemplateFile(BaseStrEnum):
        """Template files shipped with the generator"""
        CHART = "Chart.yaml.template"
        VALUES = "values.yaml.template"
        POLICY = "policy-operator-install.yaml.template"
        README = "README.md.template"

        @classmethod
        def get_required_templates(cls) -> list:
            """Get all templates needed to render a chart"""
            return [cls.CHART, cls.VALUES, cls.POLICY, cls.README]

    class OutputFile(BaseStrEnum):
        """Files written to the chart root"""
        CHART = "Chart.yaml"
        VALUES = "values.yaml"
        README = "README.md"

    # values.yaml rewrite applied for namespace-scoped operators
    TARGET_NAMESPACES_COMMENTED = (
        "  # targetNamespaces: # Optional: specify target namespaces for namespace-scoped operators"
    )
    TARGET_NAMESPACES_ENABLED = (
        "  targetNamespaces: # Target namespaces for namespace-scoped operators"
    )
    TARGET_NAMESPACE_ITEM_COMMENTED = "  #   - {namespace}"
    TARGET_NAMESPACE_ITEM_ENABLED = "    - {namespace}"


class ValuesConstants:
    """AutoShift values document layout"""

    DEFAULT_VALUES_DIR = "autoshift"
    VALUES_GLOB = "values*.yaml"
    VALUES_FILE_PATTERN = "values.{prefix}.yaml"

    # Duplicate detection windows (lines after the section / subsection header)
    SECTION_LOOKAHEAD = 50
    SUBSECTION_LOOKAHEAD = 30

    COMMENT_PREFIX = "# "
    SUBSECTION_INDENT = "  "
    LABELS_INDENT = "    "
    LABEL_INDENT = "      "
    LABELS_KEY = "labels"

    class SectionName(BaseStrEnum):
        """Top-level keys that carry cluster set or cluster entries"""
        HUB_CLUSTER_SETS = "hubClusterSets"
        MANAGED_CLUSTER_SETS = "managedClusterSets"
        CLUSTERS = "clusters"

        @classmethod
        def get_processing_order(cls) -> list:
            """Get section names in the order they are updated"""
            return [cls.HUB_CLUSTER_SETS, cls.MANAGED_CLUSTER_SETS, cls.CLUSTERS]


class FileConstants:
    """File and directory related constants"""

    APPLICATIONSET_FILE = "autoshift/templates/applicationset.yaml"
    TEMP_FILE_SUFFIX = ".tmp"
    ENCODING = "utf-8"


class ErrorMessages:
    """Centralized error message templates with improved enum-based structure"""

    class ArgumentError(BaseStrEnum):
        """Command-line argument error message templates"""
        MISSING_POSITIONAL = "Component name and subscription name are required"
        TOO_MANY_POSITIONAL = "Too many positional arguments: {extra}"
        MISSING_CHANNEL = "Channel is required. Use --channel <channel-name>"
        MISSING_NAMESPACE = "Namespace is required. Use --namespace <namespace-name>"
        INVALID_COMPONENT_NAME = (
            "Component name must be lowercase alphanumeric with hyphens only: {component}\n"
            "Examples: cert-manager, metallb, sealed-secrets"
        )
        EMPTY_VALUE = "{name} cannot be empty"

    class PreconditionError(BaseStrEnum):
        """Filesystem precondition error message templates"""
        POLICY_DIR_EXISTS = (
            "Policy directory {policy_dir} already exists\n"
            "Remove it first or choose a different component name"
        )
        TEMPLATE_DIR_MISSING = (
            "Template directory {template_dir} not found\n"
            "Run from the AutoShift repository root or pass --templates-dir"
        )

    class TemplateError(BaseStrEnum):
        """Template rendering error message templates"""
        TEMPLATE_NOT_FOUND = "Template file not found: {template}"
        TEMPLATE_READ_FAILED = "Failed to read template {template}: {error}"
        OUTPUT_WRITE_FAILED = "Failed to write {output}: {error}"
        UNKNOWN_PLACEHOLDER = "Unknown placeholder {{{{{name}}}}} left untouched in {template}"

    class ValidationError(BaseStrEnum):
        """Chart validation error message templates"""
        HELM_NOT_FOUND = (
            "helm binary not found. Install Helm and ensure it's in your PATH. "
            "Visit: https://helm.sh/docs/intro/install/"
        )
        HELM_TEMPLATE_FAILED = (
            "Generated policy fails helm template validation\n"
            "Run: helm template {chart_dir}"
        )
        INVALID_YAML = "Invalid YAML syntax in {yaml_file}: {error}"
        NO_HUB_FUNCTIONS = "No hub functions found - this is unusual for AutoShift policies"

    class ValuesError(BaseStrEnum):
        """Values document error message templates"""
        NO_VALUES_FILES = "No valid values files found to update"
        VALUES_FILE_MISSING = "Values file {path} not found, skipping"
        READ_FAILED = "Failed to read values file {path}: {error}"
        WRITE_FAILED = "Failed to write values file {path}: {error}"
        NO_SECTIONS = "No suitable sections found in {file_name}"
        ALREADY_EXISTS = "Labels for {component} already exist in {target}, skipping"
        NO_LABELS_LINE = "Could not find labels: line for {target}, skipping"
        VERIFICATION_FAILED = (
            "Inserted labels for {component} in {target} did not verify as YAML: {error}"
        )

    class ConfigError(BaseStrEnum):
        """Configuration-related error message templates"""
        INVALID_NAMESPACE = "Invalid Kubernetes namespace format: {namespace}"
        CONFIG_FILE_NOT_FOUND = "Configuration file not found: {config_path}"
