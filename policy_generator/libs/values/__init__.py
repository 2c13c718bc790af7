"""
Values Libraries

Section locating and label insertion for AutoShift values documents.
"""

from .document import ValuesDocument, Section, Subsection
from .labels import InsertionResult, InsertionStatus, LabelBlock, LabelInserter
from .updater import AutoShiftValuesUpdater, ValuesFileReport

__all__ = [
    'ValuesDocument',
    'Section',
    'Subsection',
    'InsertionResult',
    'InsertionStatus',
    'LabelBlock',
    'LabelInserter',
    'AutoShiftValuesUpdater',
    'ValuesFileReport'
]
