from __future__ import annotations

from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from stockdash.api.routes import router
from stockdash.config.settings import get_settings
from stockdash.integrations.yahoo_rest import YahooFinanceClient
from stockdash.services.quote_service import QuoteService
from stockdash.services.rate_limiter import InMemoryRateLimitStore


def build_quote_service(settings) -> QuoteService:
    return QuoteService(
        provider=YahooFinanceClient.from_settings(settings),
        max_workers=settings.QUOTES_MAX_WORKERS,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = app.state.get_settings()
    if app.state.quote_service is None:
        app.state.quote_service = build_quote_service(settings)
    print(
        f"[APP][startup] provider={settings.YAHOO_BASE_URL} "
        f"rate_limit_enabled={settings.RATE_LIMIT_ENABLED}",
        flush=True,
    )

    try:
        yield
    finally:
        app.state.quote_service.close()
        print("[APP][shutdown]", flush=True)


app = FastAPI(title="Stock Quote Gateway", version="0.1.0", lifespan=lifespan)
app.include_router(router)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={'error': exc.detail})


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(status_code=400, content={'error': 'Invalid request body'})


# NOTE: the provider is built on first startup so app import does not read env.
app.state.get_settings = get_settings
app.state.rate_limit_store = InMemoryRateLimitStore()
app.state.quote_service = None
