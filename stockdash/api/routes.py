from fastapi import APIRouter, Depends, Header, HTTPException, Request

from stockdash.errors import ErrorKind, MissingSymbolError, QuoteError
from stockdash.schemas.quote import QuoteRequest, QuotesRequest
from stockdash.services.rate_limiter import rate_limit
from stockdash.services.stock_detail import load_stock_detail

router = APIRouter()

_RATE_LIMIT_MESSAGE = 'Rate limit exceeded. Please try again later.'

_MISSING_SYMBOL_MESSAGE = 'Stock not found or invalid ticker'

_BATCH_ERROR_RESPONSES = {
    ErrorKind.NOT_FOUND: (404, 'Stock ticker not found'),
    ErrorKind.RATE_LIMIT: (429, _RATE_LIMIT_MESSAGE),
    ErrorKind.UPSTREAM: (500, 'Failed to fetch stock data'),
}


def _client_key(request: Request, api_key: str | None) -> str:
    if api_key:
        return f'key:{api_key}'
    host = request.client.host if request.client else 'unknown'
    return f'ip:{host}'


def enforce_rate_limit(
    request: Request,
    x_api_key: str | None = Header(default=None, alias='X-API-Key'),
) -> None:
    settings = request.app.state.get_settings()
    if not settings.RATE_LIMIT_ENABLED:
        return

    key = _client_key(request, x_api_key)
    allowed = rate_limit(
        key,
        max_requests=settings.RATE_LIMIT_MAX_REQUESTS,
        window_ms=settings.RATE_LIMIT_WINDOW_MS,
        store=request.app.state.rate_limit_store,
    )
    if not allowed:
        print(f"[RATE][rejected] key={key} path={request.url.path}", flush=True)
        raise HTTPException(status_code=429, detail=_RATE_LIMIT_MESSAGE)


@router.post('/api/quote', dependencies=[Depends(enforce_rate_limit)])
def post_quote(req: QuoteRequest, request: Request):
    if not req.ticker:
        raise HTTPException(status_code=400, detail='Ticker symbol is required')

    service = request.app.state.quote_service
    quote = service.get_quote(req.ticker)
    print(f"[QUOTE][single] ticker={req.ticker} quote={quote}", flush=True)
    return quote


@router.post('/api/quotes', dependencies=[Depends(enforce_rate_limit)])
def post_quotes(req: QuotesRequest, request: Request):
    service = request.app.state.quote_service
    try:
        return service.get_quotes(req.tickers)
    except QuoteError as exc:
        if exc.kind is ErrorKind.VALIDATION:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        print(f"[QUOTE][batch_error] kind={exc.kind.value} error={exc}", flush=True)
        status_code, message = _BATCH_ERROR_RESPONSES[exc.kind]
        if isinstance(exc, MissingSymbolError):
            message = _MISSING_SYMBOL_MESSAGE
        raise HTTPException(status_code=status_code, detail=message) from exc
    except Exception as exc:
        print(f"[QUOTE][batch_error] kind=UNEXPECTED error={exc!r}", flush=True)
        raise HTTPException(status_code=500, detail='Failed to fetch stock data') from exc


@router.get('/stock/{ticker}')
def get_stock_page(ticker: str, request: Request):
    service = request.app.state.quote_service
    return load_stock_detail(ticker, service.provider)
