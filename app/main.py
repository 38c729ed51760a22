import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.api.errors import error_body, register_exception_handlers
from app.api.routes.auth import router as auth_router
from app.api.routes.home import router as home_router
from app.api.routes.posts import router as posts_router
from app.api.routes.users import router as users_router
from app.core.config import settings
from app.core.lifecycle import NOT_READY_MESSAGES, Lifecycle
from app.core.logging import configure_logging
from app.db.init import bootstrap_database
from app.db.session import engine

logger = logging.getLogger(__name__)

# rotas que respondem mesmo antes do banco estar pronto
UNGATED_PATHS = {"/health"}


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("[BOOTSTRAP] Iniciando o bootstrap do banco de dados...")
    app.state.lifecycle = Lifecycle.STARTING
    try:
        await run_in_threadpool(bootstrap_database, engine)
    except Exception:
        app.state.lifecycle = Lifecycle.FAILED
        logger.exception("[BOOTSTRAP] ERRO CRÍTICO ao iniciar o banco de dados")
        raise

    app.state.lifecycle = Lifecycle.READY
    logger.info("[BOOTSTRAP] Banco de dados pronto. Servidor liberado para requisições.")
    yield
    engine.dispose()


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title="Blog Educacional API", version="0.1.1", lifespan=lifespan)
    app.state.lifecycle = Lifecycle.STARTING

    @app.middleware("http")
    async def readiness_gate(request: Request, call_next):
        lifecycle = request.app.state.lifecycle
        if lifecycle != Lifecycle.READY and request.url.path not in UNGATED_PATHS:
            return JSONResponse(status_code=503, content=error_body(NOT_READY_MESSAGES[lifecycle]))
        return await call_next(request)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "HEAD", "POST", "PATCH", "PUT", "DELETE"],
        allow_headers=["Content-Type", "Authorization"],
    )

    register_exception_handlers(app)

    app.include_router(home_router)
    app.include_router(auth_router)
    app.include_router(users_router)
    app.include_router(posts_router)

    return app


app = create_app()


def run() -> None:
    import uvicorn

    uvicorn.run("app.main:app", host="0.0.0.0", port=settings.APP_PORT)


if __name__ == "__main__":
    run()
