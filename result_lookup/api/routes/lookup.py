"""
Result Lookup API Routes
JSON surface over the per-session lookup controller
"""

from datetime import date
import logging
from typing import List, Optional, Union

from fastapi import APIRouter, Depends, HTTPException, Request, Response
from pydantic import BaseModel, Field

from result_lookup.api.deps import LookupSession, attach_session_cookie, get_lookup_session
from result_lookup.domain.models import DatePart, LookupSnapshot

logger = logging.getLogger(__name__)

router = APIRouter()


# Response models
class ExaminationInfo(BaseModel):
    id: str
    name: str
    year: int
    label: str


class ResultInfo(BaseModel):
    roll_number: str
    dob: date
    marks_obtained: float
    outcome: str
    division: Optional[str] = None
    verdict: str


class LookupStateResponse(BaseModel):
    view: str
    status: str
    loading: bool
    message: Optional[str] = None
    catalog_error: Optional[str] = None
    selected_examination_id: str
    roll_number: str
    day: Optional[int] = None
    month: Optional[int] = None
    year: Optional[int] = None
    dob: Optional[str] = None
    can_submit: bool
    result: Optional[ResultInfo] = None


class DatePartResponse(BaseModel):
    accepted: bool
    state: LookupStateResponse


# Request models
class ExaminationSelection(BaseModel):
    examination_id: str = Field("", example="e1", description="Examination id; empty clears the selection")


class RollNumberUpdate(BaseModel):
    roll_number: str = Field(..., example="12345")


class DatePartUpdate(BaseModel):
    value: Union[int, str, None] = Field(
        None,
        example="15",
        description="Raw field input; out-of-range or non-numeric values are rejected",
    )


def to_state_response(snapshot: LookupSnapshot) -> LookupStateResponse:
    record = snapshot.state.result
    result = None
    if record is not None:
        result = ResultInfo(
            roll_number=record.roll_number,
            dob=record.dob,
            marks_obtained=float(record.marks_obtained),
            outcome=record.outcome,
            division=record.division,
            verdict=record.verdict,
        )
    return LookupStateResponse(
        view=snapshot.view,
        status=snapshot.state.status.value,
        loading=snapshot.loading,
        message=snapshot.message,
        catalog_error=snapshot.catalog_error,
        selected_examination_id=snapshot.selected_examination_id,
        roll_number=snapshot.roll_number,
        day=snapshot.day,
        month=snapshot.month,
        year=snapshot.year,
        dob=snapshot.dob,
        can_submit=snapshot.can_submit,
        result=result,
    )


@router.get("/examinations", response_model=List[ExaminationInfo])
async def get_examinations(
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    """
    Examinations available for lookup, newest year first
    """
    attach_session_cookie(response, request, session)
    return [
        ExaminationInfo(id=exam.id, name=exam.name, year=exam.year, label=exam.label)
        for exam in session.controller.examinations
    ]


@router.get("/state", response_model=LookupStateResponse)
async def get_state(
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    attach_session_cookie(response, request, session)
    return to_state_response(session.controller.snapshot())


@router.put("/examination", response_model=LookupStateResponse)
async def select_examination(
    payload: ExaminationSelection,
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    attach_session_cookie(response, request, session)
    try:
        session.controller.select_examination(payload.examination_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    return to_state_response(session.controller.snapshot())


@router.put("/roll-number", response_model=LookupStateResponse)
async def set_roll_number(
    payload: RollNumberUpdate,
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    attach_session_cookie(response, request, session)
    session.controller.set_roll_number(payload.roll_number)
    return to_state_response(session.controller.snapshot())


@router.put("/dob/{part}", response_model=DatePartResponse)
async def set_date_part(
    part: DatePart,
    payload: DatePartUpdate,
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    """
    Edit one date-of-birth field. A rejected edit leaves the date unchanged.
    """
    attach_session_cookie(response, request, session)
    accepted = session.controller.set_date_part(part, payload.value)
    return DatePartResponse(
        accepted=accepted,
        state=to_state_response(session.controller.snapshot()),
    )


@router.post("/search", response_model=LookupStateResponse)
async def search(
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    """
    Run the lookup with the current inputs. The outcome (found, not found,
    error) is reported in the returned state, not via the HTTP status.
    """
    attach_session_cookie(response, request, session)
    await session.controller.search()
    return to_state_response(session.controller.snapshot())


@router.post("/reset", response_model=LookupStateResponse)
async def reset(
    request: Request,
    response: Response,
    session: LookupSession = Depends(get_lookup_session),
):
    attach_session_cookie(response, request, session)
    session.controller.reset()
    return to_state_response(session.controller.snapshot())
