"""
AutoShift Values Updater

Selects AutoShift values documents and enables a policy in each of them by
inserting its label block under every cluster set and cluster entry.
"""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Sequence

from ..core.config import GeneratorSettings, PolicyDescriptor
from ..core.constants import ErrorMessages, FileConstants, ValuesConstants
from ..core.exceptions import ValuesDocumentError
from .document import ValuesDocument
from .labels import InsertionResult, InsertionStatus, LabelBlock, LabelInserter, write_document

logger = logging.getLogger(__name__)


@dataclass
class ValuesFileReport:
    """What happened to one values file"""

    path: Path
    results: List[InsertionResult] = field(default_factory=list)
    written: bool = False
    error: Optional[str] = None

    def _targets(self, status: InsertionStatus) -> List[str]:
        return [result.target for result in self.results if result.status == status]

    @property
    def inserted(self) -> List[str]:
        return self._targets(InsertionStatus.INSERTED)

    @property
    def already_present(self) -> List[str]:
        return self._targets(InsertionStatus.ALREADY_EXISTS)

    @property
    def missing_labels(self) -> List[str]:
        return self._targets(InsertionStatus.NO_LABELS_LINE)

    @property
    def failed(self) -> List[str]:
        return self._targets(InsertionStatus.FAILED)

    @property
    def sections_found(self) -> bool:
        return bool(self.results)


class AutoShiftValuesUpdater:
    """Drives label insertion across AutoShift values files"""

    def __init__(self, descriptor: PolicyDescriptor, settings: GeneratorSettings,
                 inserter: Optional[LabelInserter] = None):
        """
        Initialize values updater

        Args:
            descriptor: Policy whose labels are inserted
            settings: Run-wide settings (values directory)
            inserter: Label inserter (defaults to one built from descriptor)
        """
        self.descriptor = descriptor
        self.settings = settings
        self.inserter = inserter or LabelInserter(LabelBlock.from_descriptor(descriptor))

    @property
    def values_dir(self) -> Path:
        return self.settings.values_path

    def resolve_values_files(self, prefixes: Optional[Sequence[str]] = None) -> List[Path]:
        """
        Select the values documents to update

        Args:
            prefixes: Values file prefixes ("hub" -> values.hub.yaml); all
                values*.yaml files when empty

        Returns:
            Existing files to update, in order

        Raises:
            ValuesDocumentError: If no valid values file remains
        """
        selected = []

        if not prefixes:
            if self.values_dir.is_dir():
                selected = sorted(
                    path for path in self.values_dir.glob(ValuesConstants.VALUES_GLOB) if path.is_file()
                )
        else:
            for prefix in prefixes:
                prefix = prefix.strip()
                if not prefix:
                    continue
                path = self.values_dir / ValuesConstants.VALUES_FILE_PATTERN.format(prefix=prefix)
                if path.is_file():
                    selected.append(path)
                else:
                    logger.warning(str(ErrorMessages.ValuesError.VALUES_FILE_MISSING).format(
                        path=self._display_path(path)
                    ))

        if not selected:
            raise ValuesDocumentError(str(ErrorMessages.ValuesError.NO_VALUES_FILES))

        return selected

    def update_document(self, document: ValuesDocument) -> tuple:
        """
        Insert the label block into every section form and subsection

        A target that fails verification is reported as FAILED and the
        remaining targets are still processed.

        Returns:
            (updated document, list of InsertionResult)
        """
        results = []

        for section_name in ValuesConstants.SectionName.get_processing_order():
            for commented in (False, True):
                section = document.find_section(str(section_name), commented)
                if section is None:
                    continue

                for subsection in section.child_keys():
                    try:
                        document, result = self.inserter.insert(
                            document, str(section_name), subsection, commented
                        )
                    except ValuesDocumentError as e:
                        # Keep the document as it was before this target
                        logger.error(str(e))
                        result = InsertionResult(
                            str(section_name), subsection, commented, InsertionStatus.FAILED, error=str(e)
                        )
                    results.append(result)

        return document, results

    def update_file(self, path: Path) -> ValuesFileReport:
        """
        Update one values file, writing it once and only when it changed

        Raises:
            ValuesDocumentError: If the file cannot be read, verified or written
        """
        path = Path(path)
        report = ValuesFileReport(path=path)
        logger.info(f"Adding labels to {path.name}...")

        try:
            original = path.read_text(encoding=FileConstants.ENCODING)
        except (OSError, UnicodeDecodeError) as e:
            raise ValuesDocumentError(
                str(ErrorMessages.ValuesError.READ_FAILED).format(path=path, error=e)
            )

        document, report.results = self.update_document(ValuesDocument(original))

        if not report.sections_found:
            logger.warning(str(ErrorMessages.ValuesError.NO_SECTIONS).format(file_name=path.name))
            return report

        if str(document) != original:
            write_document(path, document)
            report.written = True

        if report.inserted:
            logger.info(f"Added {self.descriptor.component} labels to: {' '.join(report.inserted)}")
        logger.info(f"Updated {path.name}")
        return report

    def update_all(self, prefixes: Optional[Sequence[str]] = None) -> List[ValuesFileReport]:
        """
        Update every selected values file

        A file that fails is reported and the remaining files are still
        processed.

        Raises:
            ValuesDocumentError: If no valid values file was selected
        """
        if prefixes is None:
            prefixes = self.settings.values_files

        logger.info("Adding labels to AutoShift values files...")
        reports = []
        for path in self.resolve_values_files(prefixes):
            try:
                reports.append(self.update_file(path))
            except ValuesDocumentError as e:
                logger.error(str(e))
                reports.append(ValuesFileReport(path=path, error=str(e)))

        logger.info(f"Labels added to {len(reports)} values file(s)")
        return reports

    def _display_path(self, path: Path) -> str:
        try:
            return str(Path(path).relative_to(self.settings.repo_root))
        except ValueError:
            return str(path)
