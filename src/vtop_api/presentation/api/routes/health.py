from fastapi import APIRouter, Depends

from vtop_api.application.ports.vtop_session_port import VtopSessionPort
from vtop_api.presentation.api.dependencies import get_session

router = APIRouter(tags=["health"])

@router.get("/health")
def health(session: VtopSessionPort = Depends(get_session)) -> dict[str, str]:  # type: ignore[misc]
    # Never touches the browser
    return {"status": "ok", "session": session.state.value}
