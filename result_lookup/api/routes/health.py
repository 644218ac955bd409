from fastapi import APIRouter, Request

from result_lookup.config.record_store import check_environment

router = APIRouter()


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/api/v1/environment")
def environment(request: Request):
    """
    Which record store connection variables are configured. Values are never returned.
    """
    status = check_environment(request.app.state.settings)
    return {
        "variables": status.variables,
        "all_configured": status.all_configured,
        "message": status.message,
    }
