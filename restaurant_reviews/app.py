from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, FastAPI, Query, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.sessions import SessionMiddleware

from .auth.dependencies import require_user, resolve_author
from .catalog.service import filter_restaurants, list_all
from .config import DEFAULT_APP_CONFIG, AppConfig
from .errors import StoreUnavailable, ValidationError
from .logging_config import setup_logging
from .reviews.models import ReviewCreateRequest, ReviewSummary
from .reviews.service import create_review, list_for_restaurant
from .reviews.summary import summarize
from .store.base import StoreClient
from .store.factory import build_store
from .users.directory import login_or_create
from .users.models import LoginRequest, UserOut

logger = logging.getLogger(__name__)

SERVER_ERROR = {"error": "Server error"}

router = APIRouter()


def get_config(request: Request) -> AppConfig:
    return request.app.state.config


def get_store(request: Request) -> StoreClient:
    """The app's StoreClient, built from configuration on first use."""
    state = request.app.state
    if state.store is None:
        try:
            state.store = build_store(state.config.store)
        except StoreUnavailable:
            logger.exception("Store setup error")
            raise
    return state.store


# ── Public endpoints ─────────────────────────────────────────────────────


@router.get("/health")
def health() -> dict[str, str]:
    return {"status": "ok"}


# ── Identity ─────────────────────────────────────────────────────────────


@router.post("/login")
def login(
    body: LoginRequest,
    request: Request,
    response: Response,
    store: StoreClient = Depends(get_store),
) -> dict:
    try:
        user, created = login_or_create(store, body.email, body.name)
    except StoreUnavailable:
        logger.exception("Login error")
        raise

    out = UserOut(userId=user["userId"], email=user["email"], name=user.get("name") or "").model_dump()
    request.session["user"] = out
    response.status_code = 201 if created else 200
    return out


@router.get("/me")
def me(user: dict = Depends(require_user)) -> dict:
    return user


@router.post("/logout")
def logout(request: Request) -> dict:
    request.session.clear()
    return {"status": "logged_out"}


# ── Catalog ──────────────────────────────────────────────────────────────


@router.get("/restaurants")
def restaurants(
    category: str | None = None,
    location: str | None = None,
    q: str | None = None,
    store: StoreClient = Depends(get_store),
) -> dict:
    try:
        items = list_all(store)
    except StoreUnavailable:
        logger.exception("Restaurants error")
        raise
    return {"items": filter_restaurants(items, category=category, location=location, q=q)}


# ── Reviews ──────────────────────────────────────────────────────────────


@router.get("/reviews")
def reviews(
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    store: StoreClient = Depends(get_store),
) -> dict:
    try:
        items = list_for_restaurant(store, restaurant_id)
    except StoreUnavailable:
        logger.exception("Reviews GET error")
        raise
    return {"items": items}


@router.get("/reviews/summary", response_model=ReviewSummary)
def reviews_summary(
    restaurant_id: str | None = Query(default=None, alias="restaurantId"),
    store: StoreClient = Depends(get_store),
) -> ReviewSummary:
    try:
        items = list_for_restaurant(store, restaurant_id)
    except StoreUnavailable:
        logger.exception("Reviews summary error")
        raise
    return ReviewSummary(restaurantId=restaurant_id, **summarize(items))


@router.post("/reviews", status_code=201)
def post_review(
    body: ReviewCreateRequest,
    request: Request,
    store: StoreClient = Depends(get_store),
    config: AppConfig = Depends(get_config),
) -> dict:
    user_id = resolve_author(request, body.userId, config.enforce_session_identity)
    try:
        return create_review(
            store,
            restaurant_id=body.restaurantId,
            user_id=user_id,
            rating=body.rating,
            comment=body.comment,
            user_name=body.userName,
            strict_rating=config.strict_rating,
        )
    except StoreUnavailable:
        logger.exception("Reviews POST error")
        raise


# ── Error translation ────────────────────────────────────────────────────


def _register_error_handlers(app: FastAPI) -> None:
    @app.exception_handler(ValidationError)
    async def validation_error(request: Request, exc: ValidationError) -> JSONResponse:
        logger.debug("Rejected %s %s: %s", request.method, request.url.path, exc.message)
        return JSONResponse({"error": exc.message}, status_code=400)

    @app.exception_handler(RequestValidationError)
    async def bad_body(request: Request, exc: RequestValidationError) -> JSONResponse:
        logger.debug("Malformed request to %s: %s", request.url.path, exc.errors())
        return JSONResponse({"error": "Invalid request body"}, status_code=400)

    @app.exception_handler(StarletteHTTPException)
    async def http_error(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(StoreUnavailable)
    async def store_unavailable(request: Request, exc: StoreUnavailable) -> JSONResponse:
        return JSONResponse(SERVER_ERROR, status_code=500)

    @app.exception_handler(Exception)
    async def unhandled(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s", request.method, request.url.path, exc_info=exc)
        return JSONResponse(SERVER_ERROR, status_code=500)


def create_app(config: AppConfig = DEFAULT_APP_CONFIG, store: StoreClient | None = None) -> FastAPI:
    """Build the API. ``store`` defaults to the backend named in ``config.store``."""
    setup_logging(config.log_level)

    app = FastAPI(title="Restaurant Reviews API", version="1.0.0")
    app.add_middleware(SessionMiddleware, secret_key=config.session_secret)
    app.state.config = config
    app.state.store = store

    _register_error_handlers(app)
    app.include_router(router)
    return app


app = create_app()
