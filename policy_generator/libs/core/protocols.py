"""
Protocols and Interfaces

Defines protocols (interfaces) for dependency injection and type hints.
"""

from pathlib import Path
from typing import Protocol, Dict, Any, List, Optional, Sequence


class ConfigProvider(Protocol):
    """Protocol for configuration providers"""

    def load_config(self, config_path: str) -> Dict[str, Any]:
        """Load configuration from YAML file"""
        ...


class TemplateProvider(Protocol):
    """Protocol for placeholder substitution engines"""

    def render(self, template_path: Path, placeholders: Dict[str, str]) -> str:
        """Return the template text with known placeholders replaced"""
        ...

    def render_to_file(self, template_path: Path, output_path: Path,
                       placeholders: Dict[str, str]) -> Path:
        """Render a template and write the result"""
        ...


class ChartProvider(Protocol):
    """Protocol for chart generators"""

    def generate(self) -> Path:
        """Render the chart directory and return its path"""
        ...


class ValidationProvider(Protocol):
    """Protocol for chart validators"""

    def validate(self, chart_dir: Path) -> bool:
        """Validate a rendered chart, raising on fatal failure"""
        ...


class ValuesProvider(Protocol):
    """Protocol for AutoShift values updaters"""

    def resolve_values_files(self, prefixes: Optional[Sequence[str]] = None) -> List[Path]:
        """Select the values documents to update"""
        ...

    def update_all(self, prefixes: Optional[Sequence[str]] = None) -> List[Any]:
        """Insert label blocks into every selected values document"""
        ...


class HelpProvider(Protocol):
    """Protocol for help providers"""

    def show_help(self, topic: Optional[str] = None) -> None:
        """Show help for a topic or the main help if no topic is given"""
        ...

    def show_examples(self) -> None:
        """Show usage examples"""
        ...
