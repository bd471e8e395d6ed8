from fastapi import APIRouter, Depends

from chatrelay.core.dependencies import get_session_controller
from chatrelay.services.session import SessionLifecycleController

router = APIRouter(prefix="/healthz", tags=["health"])


@router.get("")
def health(controller: SessionLifecycleController = Depends(get_session_controller)):
    return {"ok": True, "connections": controller.hub.connection_count()}
