import json
import uuid
from contextlib import asynccontextmanager
from typing import Any

import sentry_sdk
import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.middleware import SlowAPIMiddleware
from slowapi.util import get_remote_address
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.errors import MenuItemNotFoundError, PayloadValidationError
from app.core.logging import configure_logging, request_context
from app.core.sentry import init_sentry
from app.menu.models import FieldError, MenuItem
from app.menu.store import MenuStore
from app.menu.validation import parse_item_id, validate_menu_payload

configure_logging(settings.log_level)
logger = structlog.get_logger(__name__)

LOGGED_BODY_METHODS = ("POST", "PUT")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if init_sentry():
        logger.info("sentry_enabled", environment=settings.environment)
    logger.info("service_starting", port=settings.port, items=app.state.menu_store.count())
    yield
    logger.info("service_stopped")


app = FastAPI(title=settings.app_name, lifespan=lifespan)
app.state.menu_store = MenuStore.with_sample_data() if settings.seed_sample_data else MenuStore()
limiter = Limiter(key_func=get_remote_address, enabled=settings.rate_limit_enabled)
app.state.limiter = limiter
app.add_middleware(SlowAPIMiddleware)


def get_menu_store(request: Request) -> MenuStore:
    return request.app.state.menu_store


def _decode_body(body: bytes) -> Any:
    if not body:
        return None
    try:
        return json.loads(body)
    except ValueError:
        return body.decode("utf-8", errors="replace")


async def _read_json_body(request: Request) -> Any:
    body = await request.body()
    if not body.strip():
        return {}
    try:
        return json.loads(body)
    except ValueError as exc:
        raise PayloadValidationError(
            [FieldError(field="body", message="body must be valid JSON")]
        ) from exc


def _resolve_item_id(raw_id: str) -> int:
    item_id = parse_item_id(raw_id)
    if item_id is None:
        raise MenuItemNotFoundError(raw_id)
    return item_id


@app.middleware("http")
async def log_requests(request: Request, call_next):
    fields: dict[str, Any] = {}
    if request.url.query:
        fields["query"] = request.url.query

    if request.method in LOGGED_BODY_METHODS:
        body = await request.body()
        fields["body"] = _decode_body(body)

        async def receive() -> dict[str, object]:
            return {"type": "http.request", "body": body, "more_body": False}

        request._receive = receive  # type: ignore[attr-defined]

    logger.info("http_request", **fields)
    return await call_next(request)


@app.middleware("http")
async def add_request_context(request: Request, call_next):
    request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
    with request_context(request_id, request.method, request.url.path):
        try:
            response = await call_next(request)
        except Exception as exc:
            logger.exception("unhandled_exception")
            sentry_sdk.capture_exception(exc)
            response = JSONResponse(status_code=500, content={"error": "Internal server error"})

    response.headers["x-request-id"] = request_id
    return response


@app.exception_handler(PayloadValidationError)
async def payload_validation_handler(request: Request, exc: PayloadValidationError):
    logger.warning(
        "payload_validation_failed",
        fields=sorted({error.field for error in exc.errors}),
    )
    return JSONResponse(
        status_code=400,
        content={"errors": [error.model_dump() for error in exc.errors]},
    )


@app.exception_handler(MenuItemNotFoundError)
async def menu_item_not_found_handler(request: Request, exc: MenuItemNotFoundError):
    logger.warning("menu_item_not_found", item_id=str(exc.item_id))
    return JSONResponse(status_code=404, content={"error": "Menu item not found"})


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    # Unknown methods on known paths are treated as unknown routes
    if exc.status_code in (404, 405):
        logger.warning("route_not_found")
        return JSONResponse(status_code=404, content={"error": "Route not found"})
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RateLimitExceeded)
async def rate_limit_handler(request: Request, exc: RateLimitExceeded):
    logger.warning("rate_limit_exceeded")
    return JSONResponse(status_code=429, content={"error": "Rate limit exceeded"})


@app.get("/health")
async def health() -> dict[str, str]:
    return {"status": "ok"}


@app.get("/ready")
async def ready(store: MenuStore = Depends(get_menu_store)) -> JSONResponse:
    checks: dict[str, dict[str, Any]] = {}
    status_code = 200

    try:
        checks["menu_store"] = {"status": "ok", "items": store.count()}
    except Exception as exc:  # noqa: BLE001 - any failure means not ready
        checks["menu_store"] = {"status": "error", "error": str(exc)}
        status_code = 503

    overall = "ok" if status_code == 200 else "error"
    return JSONResponse(status_code=status_code, content={"status": overall, "checks": checks})


@app.get("/api/menu", response_model=list[MenuItem])
async def list_menu_items(store: MenuStore = Depends(get_menu_store)) -> list[MenuItem]:
    return store.list_items()


@app.get("/api/menu/{raw_id}", response_model=MenuItem)
async def get_menu_item(raw_id: str, store: MenuStore = Depends(get_menu_store)) -> MenuItem:
    return store.get_item(_resolve_item_id(raw_id))


@app.post("/api/menu", response_model=MenuItem, status_code=201)
@limiter.limit(settings.write_rate_limit)
async def create_menu_item(
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> MenuItem:
    payload = validate_menu_payload(await _read_json_body(request))
    return store.create_item(payload)


@app.put("/api/menu/{raw_id}", response_model=MenuItem)
@limiter.limit(settings.write_rate_limit)
async def update_menu_item(
    raw_id: str,
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> MenuItem:
    item_id = _resolve_item_id(raw_id)
    # An unknown id wins over an invalid body
    store.get_item(item_id)
    payload = validate_menu_payload(await _read_json_body(request))
    return store.update_item(item_id, payload)


@app.delete("/api/menu/{raw_id}", response_model=MenuItem)
@limiter.limit(settings.write_rate_limit)
async def delete_menu_item(
    raw_id: str,
    request: Request,
    store: MenuStore = Depends(get_menu_store),
) -> MenuItem:
    return store.delete_item(_resolve_item_id(raw_id))
