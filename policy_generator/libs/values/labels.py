"""
Label Blocks

Builds the per-component label block and splices it under a subsection's
labels: marker.
"""

import logging
from dataclasses import dataclass
from io import StringIO
from pathlib import Path
from typing import List, Optional, Tuple

from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from ..core.config import PolicyDescriptor
from ..core.constants import BaseStrEnum, ErrorMessages
from ..core.exceptions import ValuesDocumentError
from ..core.utils import atomic_write
from .document import ValuesDocument, label_indent

logger = logging.getLogger(__name__)


class InsertionStatus(BaseStrEnum):
    """Outcome of one label block insertion"""
    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"
    NO_LABELS_LINE = "no_labels_line"
    NOT_FOUND = "not_found"
    FAILED = "failed"


@dataclass(frozen=True)
class LabelBlock:
    """Label entries that enable one operator policy on a cluster set"""

    component: str
    subscription: str
    channel: str
    source: str
    source_namespace: str
    version: Optional[str] = None

    @classmethod
    def from_descriptor(cls, descriptor: PolicyDescriptor) -> 'LabelBlock':
        return cls(
            component=descriptor.component,
            subscription=descriptor.subscription,
            channel=descriptor.channel,
            source=descriptor.source,
            source_namespace=descriptor.source_namespace,
            version=descriptor.version,
        )

    def entries(self) -> List[str]:
        """Label lines without indentation, in insertion order"""
        component = self.component
        entries = [
            f"### {component}",
            f"{component}: 'true'",
            f"{component}-subscription-name: {self.subscription}",
            f"{component}-channel: {self.channel}",
            f"{component}-source: {self.source}",
            f"{component}-source-namespace: {self.source_namespace}",
        ]
        if self.version:
            entries.append(f"{component}-version: '{self.version}'")
        return entries

    def render(self, commented: bool = False) -> List[str]:
        """Indented lines matching the active or commented section form"""
        indent = label_indent(commented)
        return [f"{indent}{entry}" for entry in self.entries()]


@dataclass(frozen=True)
class InsertionResult:
    section: str
    subsection: str
    commented: bool
    status: InsertionStatus
    error: Optional[str] = None

    @property
    def target(self) -> str:
        suffix = " (commented)" if self.commented else ""
        return f"{self.section}/{self.subsection}{suffix}"


class LabelInserter:
    """Inserts one component's label block into values documents"""

    def __init__(self, label_block: LabelBlock, verify: bool = True):
        """
        Initialize label inserter

        Args:
            label_block: Block to insert
            verify: Re-parse active sections after insertion to check the result
        """
        self.label_block = label_block
        self.verify = verify
        # Every scalar loads as a string, so keys like 123 or true match as written
        self._yaml = YAML(typ='base')

    @property
    def component(self) -> str:
        return self.label_block.component

    def insert(self, document: ValuesDocument, section: str, subsection: str,
               commented: bool = False) -> Tuple[ValuesDocument, InsertionResult]:
        """
        Splice the label block after the subsection's labels: line

        Returns the (possibly unchanged) document and what happened.

        Raises:
            ValuesDocumentError: If the edited document fails verification
        """
        def _result(status):
            return InsertionResult(section, subsection, commented, status)

        located = document.find_section(section, commented)
        if located is None or located.get_subsection(subsection) is None:
            return document, _result(InsertionStatus.NOT_FOUND)

        result = _result(InsertionStatus.ALREADY_EXISTS)
        if document.component_exists(section, subsection, self.component, commented):
            logger.warning(str(ErrorMessages.ValuesError.ALREADY_EXISTS).format(
                component=self.component, target=result.target
            ))
            return document, result

        labels_index = document.find_labels_line(section, subsection, commented)
        if labels_index is None:
            result = _result(InsertionStatus.NO_LABELS_LINE)
            logger.warning(str(ErrorMessages.ValuesError.NO_LABELS_LINE).format(target=result.target))
            return document, result

        updated = document.insert_after(labels_index, self.label_block.render(commented))

        if self.verify and not commented:
            self._verify(document, updated, section, subsection)

        logger.debug(f"Inserted {self.component} labels after line {labels_index + 1} "
                     f"in {_result(InsertionStatus.INSERTED).target}")
        return updated, _result(InsertionStatus.INSERTED)

    def _load(self, text: str):
        return self._yaml.load(StringIO(text))

    def _verify(self, original: ValuesDocument, updated: ValuesDocument,
                section: str, subsection: str) -> None:
        """
        Check the inserted labels by parsing the edited document

        Skipped when the original document does not parse on its own.
        """
        target = f"{section}/{subsection}"
        try:
            self._load(str(original))
        except YAMLError as e:
            logger.debug(f"Skipping verification, original document does not parse: {e}")
            return

        def _fail(error):
            raise ValuesDocumentError(str(ErrorMessages.ValuesError.VERIFICATION_FAILED).format(
                component=self.component, target=target, error=error
            ))

        try:
            data = self._load(str(updated))
        except YAMLError as e:
            _fail(e)

        try:
            value = data[section][subsection]['labels'][self.component]
        except (KeyError, TypeError) as e:
            _fail(f"missing key {e}")

        if value != 'true':
            _fail(f"expected 'true', found {value!r}")


def write_document(path: Path, document: ValuesDocument) -> None:
    """Atomically replace path with the document text"""
    try:
        atomic_write(path, str(document))
    except OSError as e:
        raise ValuesDocumentError(
            str(ErrorMessages.ValuesError.WRITE_FAILED).format(path=path, error=e)
        )
