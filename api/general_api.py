from fastapi import APIRouter, Depends
from fastapi.responses import PlainTextResponse

from core.state import AppState, get_app_state

router = APIRouter()


@router.get("/health")
def health_check():
    return {"ok": True}


@router.get("/", response_class=PlainTextResponse)
def read_root(state: AppState = Depends(get_app_state)):
    return f"{state.settings.SITE_NAME} backend is running ✅"
