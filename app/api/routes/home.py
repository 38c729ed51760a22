from fastapi import APIRouter, Request

from app.core.lifecycle import Lifecycle

router = APIRouter(tags=["home"])

APP_VERSION = "0.1.1"


@router.get("/")
def home():
    return {
        "message": "Bem-vindo à API do Blog Educacional!",
        "version": APP_VERSION,
        "status": "online",
    }


@router.get("/health")
def health(request: Request):
    lifecycle = getattr(request.app.state, "lifecycle", Lifecycle.STARTING)
    return {"status": "ok" if lifecycle == Lifecycle.READY else lifecycle.value}
