"""
Chart Generator

Renders the operator policy Helm chart directory from the bundled templates.
"""

import logging
from pathlib import Path
from typing import Dict, List, Optional

from ..core.config import GeneratorSettings, PolicyDescriptor
from ..core.constants import ChartConstants, ErrorMessages, FileConstants
from ..core.exceptions import PreconditionError, TemplateError
from ..core.protocols import TemplateProvider
from .template_engine import TemplateEngine

logger = logging.getLogger(__name__)


class ChartGenerator:
    """Generates policies/<component>/ for one operator"""

    def __init__(
        self,
        descriptor: PolicyDescriptor,
        settings: GeneratorSettings,
        template_provider: Optional[TemplateProvider] = None
    ):
        """
        Initialize chart generator

        Args:
            descriptor: Operator policy being generated
            settings: Run-wide settings (paths)
            template_provider: Placeholder engine (defaults to TemplateEngine)
        """
        self.descriptor = descriptor
        self.settings = settings
        self.template_engine = template_provider or TemplateEngine()

    @property
    def chart_dir(self) -> Path:
        return self.settings.chart_path(self.descriptor.component)

    @property
    def template_dir(self) -> Path:
        return self.settings.template_path

    def output_plan(self) -> Dict[ChartConstants.TemplateFile, Path]:
        """Map each template to the file it renders into"""
        templates = ChartConstants.TemplateFile
        outputs = ChartConstants.OutputFile
        return {
            templates.CHART: self.chart_dir / str(outputs.CHART),
            templates.VALUES: self.chart_dir / str(outputs.VALUES),
            templates.POLICY: (
                self.chart_dir / ChartConstants.TEMPLATES_SUBDIR / self.descriptor.policy_file_name
            ),
            templates.README: self.chart_dir / str(outputs.README),
        }

    def check_preconditions(self) -> None:
        """
        Verify the chart can be generated without touching the filesystem

        Raises:
            PreconditionError: If the chart directory exists or the template
                directory is missing
            TemplateError: If a required template file is missing
        """
        if self.chart_dir.exists():
            raise PreconditionError(
                str(ErrorMessages.PreconditionError.POLICY_DIR_EXISTS).format(
                    policy_dir=self._display_path(self.chart_dir)
                )
            )

        if not self.template_dir.is_dir():
            raise PreconditionError(
                str(ErrorMessages.PreconditionError.TEMPLATE_DIR_MISSING).format(
                    template_dir=self.template_dir
                )
            )

        for template in ChartConstants.TemplateFile.get_required_templates():
            template_path = self.template_dir / str(template)
            if not template_path.is_file():
                raise TemplateError(
                    str(ErrorMessages.TemplateError.TEMPLATE_NOT_FOUND).format(template=template_path)
                )

    def generate(self) -> Path:
        """
        Render every chart artifact

        Returns:
            Path: The generated chart directory
        """
        self.check_preconditions()

        placeholders = self.descriptor.placeholders()
        templates = ChartConstants.TemplateFile

        logger.info(f"Creating directory structure {self._display_path(self.chart_dir)}/")
        (self.chart_dir / ChartConstants.TEMPLATES_SUBDIR).mkdir(parents=True)

        for template, output_path in self.output_plan().items():
            template_path = self.template_dir / str(template)

            if template == templates.VALUES:
                rendered = self.template_engine.render(template_path, placeholders)
                if self.descriptor.namespace_scoped:
                    rendered = self.enable_target_namespaces(rendered, self.descriptor.namespace)
                self._write(output_path, rendered)
            else:
                self.template_engine.render_to_file(template_path, output_path, placeholders)

            logger.info(f"Created {self._display_path(output_path)}")

        return self.chart_dir

    @staticmethod
    def enable_target_namespaces(values_text: str, namespace: str) -> str:
        """
        Uncomment the targetNamespaces block of a rendered values.yaml

        Only the exact commented lines produced by the values template are
        rewritten; anything else is left alone.
        """
        enabled = values_text.replace(
            ChartConstants.TARGET_NAMESPACES_COMMENTED,
            ChartConstants.TARGET_NAMESPACES_ENABLED
        )
        return enabled.replace(
            ChartConstants.TARGET_NAMESPACE_ITEM_COMMENTED.format(namespace=namespace),
            ChartConstants.TARGET_NAMESPACE_ITEM_ENABLED.format(namespace=namespace)
        )

    def generated_files(self) -> List[Path]:
        """Files that exist after generation, in render order"""
        return [path for path in self.output_plan().values() if path.exists()]

    def _write(self, output_path: Path, content: str) -> None:
        try:
            output_path.write_text(content, encoding=FileConstants.ENCODING)
        except OSError as e:
            raise TemplateError(
                str(ErrorMessages.TemplateError.OUTPUT_WRITE_FAILED).format(output=output_path, error=e)
            )

    def _display_path(self, path: Path) -> str:
        try:
            return str(Path(path).relative_to(self.settings.repo_root))
        except ValueError:
            return str(path)
