"""
Chart Validator

Validates a generated chart with `helm template` and a YAML loader.
"""

import logging
import shutil
import subprocess
from pathlib import Path
from typing import Callable, List, Optional

import yaml

from ..core.constants import ChartConstants, ErrorMessages, FileConstants
from ..core.exceptions import ChartValidationError

logger = logging.getLogger(__name__)


class ChartValidator:
    """Runs helm and YAML checks against a rendered policy chart"""

    def __init__(self, helm_binary: Optional[str] = None,
                 runner: Optional[Callable[..., subprocess.CompletedProcess]] = None):
        """
        Initialize chart validator

        Args:
            helm_binary: Explicit helm path (looked up on PATH otherwise)
            runner: subprocess.run compatible callable
        """
        self._helm_binary = helm_binary
        self.runner = runner or subprocess.run

    def _find_helm_binary(self) -> str:
        """
        Find helm binary in system PATH

        Raises:
            ChartValidationError: If helm is not installed
        """
        if self._helm_binary:
            return self._helm_binary

        found = shutil.which(ChartConstants.HELM_BINARY)
        if not found:
            raise ChartValidationError(str(ErrorMessages.ValidationError.HELM_NOT_FOUND))

        self._helm_binary = found
        logger.debug(f"Found helm binary at: {self._helm_binary}")
        return self._helm_binary

    def validate(self, chart_dir: Path) -> bool:
        """
        Validate a rendered chart

        Args:
            chart_dir: Chart directory (policies/<component>)

        Returns:
            bool: True when every fatal check passes

        Raises:
            ChartValidationError: If helm rendering or YAML parsing fails
        """
        chart_dir = Path(chart_dir)
        logger.info("Validating generated policy...")

        self.run_helm_template(chart_dir)

        if not self.has_hub_functions(chart_dir):
            logger.warning(str(ErrorMessages.ValidationError.NO_HUB_FUNCTIONS))

        self.check_yaml_syntax(chart_dir)

        logger.info("Policy validation passed")
        return True

    def run_helm_template(self, chart_dir: Path) -> subprocess.CompletedProcess:
        """Render the chart with helm; any non-zero exit is fatal"""
        cmd = [self._find_helm_binary(), 'template', str(chart_dir)]
        logger.debug(f"Running: {' '.join(cmd)}")

        try:
            result = self.runner(cmd, capture_output=True, text=True)
        except OSError as e:
            raise ChartValidationError(f"Failed to run helm: {e}")

        if result.returncode != 0:
            if result.stderr:
                logger.debug(f"helm stderr: {result.stderr.strip()}")
            raise ChartValidationError(
                str(ErrorMessages.ValidationError.HELM_TEMPLATE_FAILED).format(chart_dir=chart_dir)
            )

        return result

    @staticmethod
    def has_hub_functions(chart_dir: Path) -> bool:
        """Check whether any policy template carries the escaped hub marker"""
        templates_dir = Path(chart_dir) / ChartConstants.TEMPLATES_SUBDIR
        for template in sorted(templates_dir.glob('*.yaml')):
            if ChartConstants.HUB_ESCAPE_MARKER in template.read_text(encoding=FileConstants.ENCODING):
                return True
        return False

    @staticmethod
    def check_yaml_syntax(chart_dir: Path) -> List[Path]:
        """
        Parse the plain YAML files of the chart root

        Files under templates/ are Helm templates and are covered by
        `helm template` instead.

        Returns:
            List of files that were checked
        """
        checked = []
        for yaml_file in sorted(Path(chart_dir).glob('*.yaml')):
            if not yaml_file.is_file():
                continue
            try:
                with open(yaml_file, 'r', encoding=FileConstants.ENCODING) as f:
                    yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ChartValidationError(
                    str(ErrorMessages.ValidationError.INVALID_YAML).format(yaml_file=yaml_file, error=e)
                )
            checked.append(yaml_file)
        return checked
