"""
Single-page HTML surface: the lookup form or the result view.
"""

import logging

from fastapi import APIRouter, Depends, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, RedirectResponse

from result_lookup.api.deps import LookupSession, attach_session_cookie, get_lookup_session
from result_lookup.domain.models import DatePart
from result_lookup.web.formatters import format_page

logger = logging.getLogger(__name__)

router = APIRouter()


def _back_to_page(request: Request, session: LookupSession) -> RedirectResponse:
    # 303 so the browser follows up with a GET
    response = RedirectResponse(url="/", status_code=303)
    return attach_session_cookie(response, request, session)


@router.get("/", response_class=HTMLResponse)
async def page(request: Request, session: LookupSession = Depends(get_lookup_session)):
    response = HTMLResponse(format_page(session.controller.snapshot()))
    return attach_session_cookie(response, request, session)


@router.post("/search")
async def submit_search(
    request: Request,
    examination_id: str = Form(""),
    roll_number: str = Form(""),
    day: str = Form(""),
    month: str = Form(""),
    year: str = Form(""),
    session: LookupSession = Depends(get_lookup_session),
):
    controller = session.controller
    try:
        controller.select_examination(examination_id)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e))
    controller.set_roll_number(roll_number)
    for part, value in ((DatePart.DAY, day), (DatePart.MONTH, month), (DatePart.YEAR, year)):
        # Blank inputs leave the field as it was
        if value.strip():
            controller.set_date_part(part, value)

    await controller.search()
    return _back_to_page(request, session)


@router.post("/reset")
async def submit_reset(request: Request, session: LookupSession = Depends(get_lookup_session)):
    session.controller.reset()
    return _back_to_page(request, session)
