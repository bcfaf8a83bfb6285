import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from starlette.responses import Response

from vtop_api.config import configure_logging
from vtop_api.domain.errors import VtopError
from vtop_api.presentation.api.dependencies import close_session
from vtop_api.presentation.api.metrics import OPERATION_ERRORS, registry
from vtop_api.presentation.api.routes.health import router as health_router
from vtop_api.presentation.api.routes.vtop import router as vtop_router

configure_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(_: FastAPI):
    yield
    close_session()


app = FastAPI(title="VTOP Session API", version="0.1.0", lifespan=lifespan)
app.include_router(health_router)
app.include_router(vtop_router)


@app.exception_handler(RequestValidationError)
async def validation_error(_: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(status_code=400, content={"error": "Malformed request body."})


# Precondition failures and scraping failures share the same 500 envelope
@app.exception_handler(VtopError)
async def vtop_error(request: Request, exc: VtopError) -> JSONResponse:
    OPERATION_ERRORS.labels(error=type(exc).__name__).inc()
    logger.error("%s %s failed: %s: %s", request.method, request.url.path, type(exc).__name__, exc)
    return JSONResponse(status_code=500, content={"error": str(exc)})


@app.exception_handler(Exception)
async def internal_error(request: Request, exc: Exception) -> JSONResponse:
    OPERATION_ERRORS.labels(error=type(exc).__name__).inc()
    logger.exception("%s %s crashed", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"error": str(exc) or type(exc).__name__})


@app.get("/metrics")
def metrics() -> Response:  # type: ignore[misc]
    data = generate_latest(registry)
    return Response(content=data, media_type=CONTENT_TYPE_LATEST)
