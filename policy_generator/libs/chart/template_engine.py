"""
Template Engine

Substitutes {{PLACEHOLDER}} tokens in the static chart templates.
"""

import logging
import re
from pathlib import Path
from typing import Dict

from ..core.constants import ErrorMessages, FileConstants
from ..core.exceptions import TemplateError

logger = logging.getLogger(__name__)


class TemplateEngine:
    """Literal placeholder substitution for *.template files"""

    # Upper-case tokens only; Helm expressions like {{ .Values.x }} never match
    PLACEHOLDER_PATTERN = re.compile(r'\{\{([A-Z][A-Z0-9_]*)\}\}')

    def __init__(self, strict_placeholders: bool = False):
        """
        Initialize template engine

        Args:
            strict_placeholders: Raise instead of warning on unknown placeholders
        """
        self.strict_placeholders = strict_placeholders

    def substitute(self, text: str, placeholders: Dict[str, str], source: str = "<string>") -> str:
        """
        Replace every known placeholder in text.

        Values are inserted literally. Unknown placeholders stay as they are.

        Args:
            text: Template text
            placeholders: Token name to replacement value
            source: Name used in warnings

        Returns:
            str: Rendered text
        """
        unknown = set()

        def _replace(match):
            name = match.group(1)
            if name in placeholders:
                value = placeholders[name]
                return "" if value is None else str(value)
            unknown.add(name)
            return match.group(0)

        rendered = self.PLACEHOLDER_PATTERN.sub(_replace, text)

        for name in sorted(unknown):
            message = str(ErrorMessages.TemplateError.UNKNOWN_PLACEHOLDER).format(
                name=name, template=source
            )
            if self.strict_placeholders:
                raise TemplateError(message)
            logger.warning(message)

        return rendered

    def render(self, template_path: Path, placeholders: Dict[str, str]) -> str:
        """
        Read a template file and substitute its placeholders

        Raises:
            TemplateError: If the template is missing or unreadable
        """
        template_path = Path(template_path)
        if not template_path.is_file():
            raise TemplateError(
                str(ErrorMessages.TemplateError.TEMPLATE_NOT_FOUND).format(template=template_path)
            )

        try:
            text = template_path.read_text(encoding=FileConstants.ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            raise TemplateError(
                str(ErrorMessages.TemplateError.TEMPLATE_READ_FAILED).format(
                    template=template_path, error=e
                )
            )

        logger.debug(f"Rendering template {template_path.name}")
        return self.substitute(text, placeholders, source=template_path.name)

    def render_to_file(self, template_path: Path, output_path: Path,
                       placeholders: Dict[str, str]) -> Path:
        """
        Render a template and write it to output_path

        Returns:
            Path: The written output file
        """
        rendered = self.render(template_path, placeholders)
        output_path = Path(output_path)

        try:
            output_path.parent.mkdir(parents=True, exist_ok=True)
            output_path.write_text(rendered, encoding=FileConstants.ENCODING)
        except OSError as e:
            raise TemplateError(
                str(ErrorMessages.TemplateError.OUTPUT_WRITE_FAILED).format(
                    output=output_path, error=e
                )
            )

        return output_path
