import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from ticketdesk.api.routes.auth import router as auth_router
from ticketdesk.api.routes.metrics import router as metrics_router
from ticketdesk.api.routes.tickets import router as tickets_router
from ticketdesk.api.routes.users import router as users_router
from ticketdesk.core.config import settings
from ticketdesk.core.errors import (
    InvalidCredentialsError,
    NotFoundError,
    TicketdeskError,
    UnauthenticatedError,
    ValidationError,
)
from ticketdesk.core.logging import configure_logging
from ticketdesk.metrics.prometheus import api_request_latency_seconds

configure_logging(settings.log_level, settings.log_json)

app = FastAPI(
    title="Ticketdesk API",
    version="1.0.0",
    description="In-memory support ticket service (users, tickets, comments)",
)

# Web client runs on localhost:3000.
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

_ERROR_STATUS = {
    NotFoundError: 404,
    InvalidCredentialsError: 401,
    UnauthenticatedError: 401,
    ValidationError: 400,
}


@app.exception_handler(TicketdeskError)
async def ticketdesk_error_handler(request: Request, exc: TicketdeskError):
    status = next((code for kind, code in _ERROR_STATUS.items() if isinstance(exc, kind)), 500)
    return JSONResponse(status_code=status, content={"error": exc.kind, "detail": exc.message})


@app.middleware("http")
async def metrics_middleware(request: Request, call_next):
    start = time.perf_counter()
    response: Response | None = None
    try:
        response = await call_next(request)
        return response
    finally:
        dt = time.perf_counter() - start
        status = str(response.status_code) if response is not None else "unknown"
        api_request_latency_seconds.labels(
            route=request.url.path, method=request.method, status=status
        ).observe(dt)


@app.get("/health")
def health():
    return {"status": "ok"}


app.include_router(tickets_router)
app.include_router(users_router)
app.include_router(auth_router)
app.include_router(metrics_router)
