from dataclasses import dataclass

from fastapi import Request, Response

from result_lookup.api.sessions import LookupSessionRegistry
from result_lookup.domain.services.result_lookup_controller import ResultLookupController


@dataclass(frozen=True)
class LookupSession:
    id: str
    controller: ResultLookupController
    is_new: bool


async def get_lookup_session(request: Request) -> LookupSession:
    registry: LookupSessionRegistry = request.app.state.sessions
    cookie_name = request.app.state.settings.SESSION_COOKIE_NAME
    presented = request.cookies.get(cookie_name)
    session_id, controller = await registry.get_or_create(presented)
    return LookupSession(id=session_id, controller=controller, is_new=session_id != presented)


def attach_session_cookie(response: Response, request: Request, session: LookupSession) -> Response:
    if session.is_new:
        response.set_cookie(
            request.app.state.settings.SESSION_COOKIE_NAME,
            session.id,
            httponly=True,
            samesite="lax",
        )
    return response
