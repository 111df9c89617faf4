from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException
from .core.config import get_settings, Settings
from .core.logging import init_logging, request_context_middleware
from .core import errors
from .db.dal import Database
from .db.schema import init_db
from .routers import convert, rates
from .services.rates.base import RateCache, RateFetcher
from .services.rates.cache import SqliteRateCache
from .services.rates.providers import make_rate_fetcher
from .services.rates.store import ExchangeRateStore

logger = logging.getLogger("unitconv")


def build_rate_store(
    settings: Settings,
    fetcher: RateFetcher | None = None,
    cache: RateCache | None = None,
) -> ExchangeRateStore:
    """Wire the store once per application; consumers receive it by reference."""
    if cache is None:
        try:
            init_db(settings.db_path)  # type: ignore[arg-type]
        except Exception:
            logger.exception("failed to initialize database")
            raise
        cache = SqliteRateCache(Database(settings.db_path), key=settings.rates_cache_key)  # type: ignore[arg-type]
    if fetcher is None:
        fetcher = make_rate_fetcher(settings.exchange_rate_provider, settings)
    return ExchangeRateStore.from_settings(settings, fetcher, cache)


def create_app(
    settings_override: Settings | None = None,
    *,
    fetcher: RateFetcher | None = None,
    cache: RateCache | None = None,
) -> FastAPI:
    """Application factory.

    settings_override: pass an already constructed Settings instance for tests
    to isolate environment (e.g., temp DB). Falls back to cached get_settings().
    fetcher / cache: replace the HTTP fetcher or the SQLite cache (tests).
    """
    settings = settings_override or get_settings()
    settings.init_post_load()
    init_logging(debug=settings.debug)

    store = build_rate_store(settings, fetcher=fetcher, cache=cache)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # Automatic staleness check at startup, like a view load
        if settings.refresh_on_startup:
            await store.refresh_if_stale()
        yield
        await store.aclose()

    app = FastAPI(
        title=settings.app_name,
        debug=settings.debug,
        version=settings.version,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.rate_store = store

    # Middleware (request id / structured logging)
    app.middleware("http")(request_context_middleware)

    # Error handlers
    app.add_exception_handler(StarletteHTTPException, errors.http_error_handler)
    app.add_exception_handler(RequestValidationError, errors.validation_error_handler)
    app.add_exception_handler(Exception, errors.server_error_handler)

    # Routers
    app.include_router(convert.router)
    app.include_router(rates.router)

    @app.get("/")
    async def root():
        return {"message": settings.app_name, "version": settings.version}

    @app.get("/health")
    async def health():
        return {"status": "ok", "rates_state": store.state.value}

    return app


app = create_app()
