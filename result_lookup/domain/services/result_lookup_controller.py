"""
Result Lookup Controller
Owns one session's form inputs and lookup state.

State machine:

    IDLE ──search()──▶ SEARCHING ──▶ FOUND | NOT_FOUND | ERRORED
      ▲                                   │
      └───────────── reset() ◀────────────┘

search() with a missing field goes straight to ERRORED without a query.
reset() keeps the form inputs and only drops the result or message.
"""

from __future__ import annotations

import logging
from datetime import date
from typing import Callable, List, Optional, Tuple, Union

from result_lookup.domain.exceptions import (
    IncompleteQueryError,
    RecordNotFoundError,
    RecordStoreError,
)
from result_lookup.domain.models import (
    DateOfBirth,
    DatePart,
    Examination,
    LookupSnapshot,
    LookupStatus,
    WorkflowState,
)
from result_lookup.domain.services.catalog_loader import ExaminationCatalogLoader
from result_lookup.infrastructure.record_store.types import RecordStore

logger = logging.getLogger(__name__)


class ResultLookupController:
    def __init__(self, store: RecordStore, clock: Callable[[], date] = date.today):
        self._store = store
        self.catalog = ExaminationCatalogLoader(store)
        self.selected_examination_id = ""
        self.roll_number = ""
        self.dob = DateOfBirth(clock)
        self._state = WorkflowState.idle()
        # Bumped by every search and reset; a settlement carrying an older
        # value belongs to a lookup the user has already moved past
        self._token = 0

    # ------------------------------------------------------------------
    # STATE
    # ------------------------------------------------------------------

    @property
    def state(self) -> WorkflowState:
        return self._state

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def view(self) -> str:
        return self._state.view

    @property
    def examinations(self) -> Tuple[Examination, ...]:
        return self.catalog.examinations

    def missing_fields(self) -> List[str]:
        missing = []
        if not self.selected_examination_id:
            missing.append("examination")
        if not self.roll_number.strip():
            missing.append("roll_number")
        if not self.dob.is_set:
            missing.append("dob")
        return missing

    @property
    def can_submit(self) -> bool:
        return not self.loading and not self.missing_fields()

    def snapshot(self) -> LookupSnapshot:
        return LookupSnapshot(
            examinations=self.catalog.examinations,
            catalog_error=self.catalog.error,
            selected_examination_id=self.selected_examination_id,
            roll_number=self.roll_number,
            day=self.dob.day,
            month=self.dob.month,
            year=self.dob.year,
            dob=self.dob.isoformat(),
            state=self._state,
            can_submit=self.can_submit,
        )

    # ------------------------------------------------------------------
    # LIFECYCLE
    # ------------------------------------------------------------------

    async def initialize(self) -> None:
        """Load the examination catalog. Runs once per controller."""
        await self.catalog.load()

    # ------------------------------------------------------------------
    # FORM INPUTS
    # ------------------------------------------------------------------

    def _input_changed(self) -> None:
        if self._state.status in (LookupStatus.NOT_FOUND, LookupStatus.ERRORED):
            self._state = WorkflowState.idle()

    def select_examination(self, examination_id: str) -> None:
        examination_id = examination_id or ""
        if examination_id and self.catalog.get(examination_id) is None:
            raise ValueError(f"Unknown examination: {examination_id}")
        self.selected_examination_id = examination_id
        self._input_changed()

    def set_roll_number(self, roll_number: str) -> None:
        self.roll_number = roll_number or ""
        self._input_changed()

    def set_date_part(self, part: Union[DatePart, str], value: Union[str, int, None]) -> bool:
        accepted = self.dob.set_part(part, value)
        if accepted:
            self._input_changed()
        else:
            logger.debug("Rejected %s value %r; keeping %s", DatePart(part).value, value, self.dob)
        return accepted

    # ------------------------------------------------------------------
    # ACTIONS
    # ------------------------------------------------------------------

    async def search(self) -> WorkflowState:
        if self.loading:
            logger.warning("Search ignored: a lookup is already in flight")
            return self._state

        missing = self.missing_fields()
        if missing:
            error = IncompleteQueryError(missing)
            logger.info("Search blocked | %s", error.detail)
            self._state = WorkflowState.errored(error.user_message)
            return self._state

        self._token += 1
        token = self._token
        self._state = WorkflowState.searching()

        examination_id = self.selected_examination_id
        roll_number = self.roll_number.strip()
        dob = self.dob.isoformat()
        logger.info("Looking up result | exam=%s", examination_id)

        try:
            try:
                record = await self._store.find_result(examination_id, roll_number, dob)
            except RecordNotFoundError:
                settled = WorkflowState.not_found(RecordNotFoundError.user_message)
            except RecordStoreError as exc:
                logger.error("Error fetching result: %s", exc.detail or exc)
                settled = WorkflowState.errored(RecordStoreError.user_message)
            except Exception:
                logger.exception("Unexpected failure while fetching result")
                settled = WorkflowState.errored(RecordStoreError.user_message)
            else:
                settled = WorkflowState.found(record)
            return self._settle(token, settled)
        finally:
            # Cancelled before settling: never leave the form stuck on loading
            if token == self._token and self._state.loading:
                self._state = WorkflowState.idle()

    def _settle(self, token: int, settled: WorkflowState) -> WorkflowState:
        if token != self._token:
            logger.info("Discarding stale lookup settlement (%s)", settled.status.value)
            return self._state
        self._state = settled
        logger.info("Lookup settled | %s", settled.status.value)
        return settled

    def reset(self) -> WorkflowState:
        """Back to the form. Inputs are kept so the query can be corrected and resent."""
        self._token += 1
        self._state = WorkflowState.idle()
        return self._state
