"""Directory maintenance pipeline.

This module provides enumeration and inspection of home directories,
candidate selection, and confirmed deletion.
"""

from homesweep.maintenance.confirm import DeletionConfirmer, Prompter, TerminalPrompter
from homesweep.maintenance.models import DirectoryRecord, RunMode, SelectionMode
from homesweep.maintenance.operator import DeletionResult, DirectoryOperator
from homesweep.maintenance.policy import is_candidate, select_candidates
from homesweep.maintenance.protected import PROTECTED_DIRECTORY_NAMES, is_protected_directory
from homesweep.maintenance.scanner import DirectoryInspector, list_subdirectories

__all__ = [
    "PROTECTED_DIRECTORY_NAMES",
    "DeletionConfirmer",
    "DeletionResult",
    "DirectoryInspector",
    "DirectoryOperator",
    "DirectoryRecord",
    "Prompter",
    "RunMode",
    "SelectionMode",
    "TerminalPrompter",
    "is_candidate",
    "is_protected_directory",
    "list_subdirectories",
    "select_candidates",
]
