"""Workflow states for a single lookup session.

Keep these as simple, serializable structures. Transition rules live in
the controller.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Literal, Optional, Tuple

from result_lookup.domain.models.examination import Examination
from result_lookup.domain.models.result import ResultRecord

View = Literal["form", "result"]


class LookupStatus(str, Enum):
    IDLE = "idle"
    SEARCHING = "searching"
    FOUND = "found"
    NOT_FOUND = "not_found"
    ERRORED = "errored"


@dataclass(frozen=True)
class WorkflowState:
    status: LookupStatus = LookupStatus.IDLE
    result: Optional[ResultRecord] = None
    message: Optional[str] = None

    @staticmethod
    def idle() -> "WorkflowState":
        return WorkflowState(LookupStatus.IDLE)

    @staticmethod
    def searching() -> "WorkflowState":
        return WorkflowState(LookupStatus.SEARCHING)

    @staticmethod
    def found(record: ResultRecord) -> "WorkflowState":
        return WorkflowState(LookupStatus.FOUND, result=record)

    @staticmethod
    def not_found(message: str) -> "WorkflowState":
        return WorkflowState(LookupStatus.NOT_FOUND, message=message)

    @staticmethod
    def errored(message: str) -> "WorkflowState":
        return WorkflowState(LookupStatus.ERRORED, message=message)

    @property
    def loading(self) -> bool:
        return self.status == LookupStatus.SEARCHING

    @property
    def view(self) -> View:
        # The result view needs a record in hand; everything else keeps the form up
        return "result" if self.status == LookupStatus.FOUND else "form"


@dataclass(frozen=True)
class LookupSnapshot:
    """
    Everything a view needs to render one lookup session.
    """
    examinations: Tuple[Examination, ...]
    catalog_error: Optional[str]
    selected_examination_id: str
    roll_number: str
    day: Optional[int]
    month: Optional[int]
    year: Optional[int]
    dob: Optional[str]
    state: WorkflowState = field(default_factory=WorkflowState.idle)
    can_submit: bool = False

    @property
    def view(self) -> View:
        return self.state.view

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def message(self) -> Optional[str]:
        return self.state.message
