"""
Domain Models Package
Export all domain entities
"""

from .date_of_birth import DateOfBirth, DatePart, PART_BOUNDS
from .examination import Examination
from .result import ResultRecord
from .workflow import LookupSnapshot, LookupStatus, WorkflowState

__all__ = [
    "DateOfBirth",
    "DatePart",
    "Examination",
    "LookupSnapshot",
    "LookupStatus",
    "PART_BOUNDS",
    "ResultRecord",
    "WorkflowState",
]
