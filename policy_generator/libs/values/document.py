"""
Values Document

Line-oriented model of an AutoShift values file.

Structure is recognised from indentation only, so comments, ordering and
commented-out sections survive edits byte for byte. A section is either
active (``clusters:``) or commented out (``# clusters:``); both forms share
one code path keyed on the ``commented`` flag:

    active                      commented
    clusters:                   # clusters:
      cluster-a:                #   cluster-a:
        labels:                 #     labels:
          key: value            #       key: value
"""

import re
from dataclasses import dataclass, field
from typing import List, Optional

from ..core.constants import ValuesConstants


def line_prefix(commented: bool) -> str:
    """Column-0 prefix for a section form"""
    return ValuesConstants.COMMENT_PREFIX if commented else ""


def label_indent(commented: bool) -> str:
    """Leading text of a label line in the given form"""
    return line_prefix(commented) + ValuesConstants.LABEL_INDENT


@dataclass(frozen=True)
class Subsection:
    """A named cluster set or cluster entry under a section"""

    name: str
    header_index: int
    end_index: int
    commented: bool
    labels_index: Optional[int] = None

    @property
    def has_labels(self) -> bool:
        return self.labels_index is not None


@dataclass(frozen=True)
class Section:
    """A top-level hubClusterSets / managedClusterSets / clusters block"""

    name: str
    header_index: int
    end_index: int
    commented: bool
    subsections: List[Subsection] = field(default_factory=list)

    def child_keys(self) -> List[str]:
        return [subsection.name for subsection in self.subsections]

    def get_subsection(self, name: str) -> Optional[Subsection]:
        for subsection in self.subsections:
            if subsection.name == name:
                return subsection
        return None


class ValuesDocument:
    """Parsed view over the lines of a values document"""

    # Any column-0 letter ends the current section
    TOP_LEVEL_PATTERN = re.compile(r'^[a-zA-Z]')

    def __init__(self, text: str):
        self.text = text
        # split('\n') keeps a trailing '' when the text ends with a newline,
        # so joining restores the exact original bytes
        self.lines = text.split('\n')

    def __str__(self) -> str:
        return '\n'.join(self.lines)

    @staticmethod
    def _section_pattern(name: str, commented: bool):
        return re.compile(rf'^{re.escape(line_prefix(commented))}{re.escape(name)}:')

    @staticmethod
    def _subsection_pattern(commented: bool):
        prefix = re.escape(line_prefix(commented) + ValuesConstants.SUBSECTION_INDENT)
        return re.compile(rf'^{prefix}([a-zA-Z][^:]*):')

    @staticmethod
    def _labels_pattern(commented: bool):
        prefix = re.escape(line_prefix(commented) + ValuesConstants.LABELS_INDENT)
        # Block marker only; "labels: {}" is a flow mapping, not an insertion point
        return re.compile(rf'^{prefix}{ValuesConstants.LABELS_KEY}:\s*(#.*)?$')

    def _is_section_end(self, line: str, commented: bool) -> bool:
        if self.TOP_LEVEL_PATTERN.match(line):
            return True
        if commented:
            # Another commented top-level section starts here
            for name in ValuesConstants.SectionName:
                if self._section_pattern(str(name), True).match(line):
                    return True
        return False

    def find_section(self, name: str, commented: bool = False) -> Optional[Section]:
        """
        Locate a section and its subsections

        Args:
            name: Section key (hubClusterSets, managedClusterSets, clusters)
            commented: Look for the "# name:" form

        Returns:
            Section or None when the document has no such section
        """
        header_pattern = self._section_pattern(name, commented)
        header_index = None
        for index, line in enumerate(self.lines):
            if header_pattern.match(line):
                header_index = index
                break

        if header_index is None:
            return None

        end_index = len(self.lines)
        for index in range(header_index + 1, len(self.lines)):
            if self._is_section_end(self.lines[index], commented):
                end_index = index
                break

        subsections = self._find_subsections(header_index, end_index, commented)
        return Section(
            name=name,
            header_index=header_index,
            end_index=end_index,
            commented=commented,
            subsections=subsections
        )

    def _find_subsections(self, start: int, end: int, commented: bool) -> List[Subsection]:
        subsection_pattern = self._subsection_pattern(commented)
        labels_pattern = self._labels_pattern(commented)

        headers = []
        for index in range(start + 1, end):
            match = subsection_pattern.match(self.lines[index])
            if match:
                headers.append((match.group(1).strip(), index))

        subsections = []
        for position, (name, header_index) in enumerate(headers):
            # A subsection ends at its next sibling
            sub_end = headers[position + 1][1] if position + 1 < len(headers) else end
            labels_index = None
            for index in range(header_index + 1, sub_end):
                if labels_pattern.match(self.lines[index]):
                    labels_index = index
                    break
            subsections.append(Subsection(
                name=name,
                header_index=header_index,
                end_index=sub_end,
                commented=commented,
                labels_index=labels_index
            ))
        return subsections

    def list_subsections(self, name: str, commented: bool = False) -> List[str]:
        """Ordered child key names of a section (empty when absent)"""
        section = self.find_section(name, commented)
        return section.child_keys() if section else []

    def find_labels_line(self, section_name: str, subsection_name: str,
                         commented: bool = False) -> Optional[int]:
        """0-based index of the subsection's labels: marker, if any"""
        section = self.find_section(section_name, commented)
        if section is None:
            return None
        subsection = section.get_subsection(subsection_name)
        if subsection is None:
            return None
        return subsection.labels_index

    def component_exists(self, section_name: str, subsection_name: str,
                         component: str, commented: bool = False) -> bool:
        """
        Check whether a subsection already names the component as a label key

        Looks at the lines following the section and subsection headers
        (SECTION_LOOKAHEAD / SUBSECTION_LOOKAHEAD, clipped to the subsection)
        and at the whole labels block of the subsection.
        """
        section = self.find_section(section_name, commented)
        if section is None:
            return False
        subsection = section.get_subsection(subsection_name)
        if subsection is None:
            return False

        key_pattern = re.compile(rf'^{re.escape(label_indent(commented))}{re.escape(component)}:')

        window_end = min(
            subsection.end_index,
            subsection.header_index + 1 + ValuesConstants.SUBSECTION_LOOKAHEAD,
            section.header_index + 1 + ValuesConstants.SECTION_LOOKAHEAD,
        )
        candidates = range(subsection.header_index + 1, window_end)
        if any(key_pattern.match(self.lines[index]) for index in candidates):
            return True

        if subsection.has_labels:
            labels_block = range(subsection.labels_index + 1, subsection.end_index)
            return any(key_pattern.match(self.lines[index]) for index in labels_block)

        return False

    def insert_after(self, index: int, new_lines: List[str]) -> 'ValuesDocument':
        """
        Return a new document with new_lines spliced in after line index

        When index is the last line the lines are appended; a missing final
        newline stays missing.
        """
        if index < 0 or index >= len(self.lines):
            raise IndexError(f"Line index {index} out of range")

        lines = list(self.lines)
        lines[index + 1:index + 1] = new_lines
        return ValuesDocument('\n'.join(lines))
