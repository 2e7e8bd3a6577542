# backend/main.py
import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from config import settings
from database import SessionLocal, init_db
from utils.errors import StorefrontError, get_error_message
from utils.logging_config import setup_logging
from utils import settings_cache

# Import routerów
from routes.auth import router as auth_router
from routes.shop import router as shop_router
from routes.cart import router as cart_router
from routes.products import router as products_router
from routes.banners import router as banners_router
from routes.orders import router as orders_router
from routes.content import router as content_router
from routes.settings import router as settings_router
from routes.stats import router as stats_router
from routes.logs import router as logs_router

logger = logging.getLogger(__name__)


def load_stored_settings(app: FastAPI) -> None:
    db = SessionLocal()
    try:
        settings_cache.publish_stored_settings(db, app.state.settings_channel)
    finally:
        db.close()


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    load_stored_settings(app)
    logger.info("Storefront API started")
    yield
    app.state.disconnect_settings()


def create_app(lifespan_handler=lifespan) -> FastAPI:
    setup_logging()

    app = FastAPI(title="Wholesale Storefront API", version="1.0.0", lifespan=lifespan_handler)

    # One settings cache per process, fed by the settings channel
    app.state.settings_cache = settings_cache.SettingsCache()
    app.state.settings_channel = settings_cache.SettingsChannel()
    app.state.disconnect_settings = settings_cache.connect(app.state.settings_cache, app.state.settings_channel)

    # Uploads - upewniamy się, że katalog istnieje
    Path(settings.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.UPLOAD_DIR), name="uploads")

    origins = ["http://localhost:5173", "http://127.0.0.1:5173"]
    if settings.FRONTEND_URL and settings.FRONTEND_URL not in origins:
        origins.append(settings.FRONTEND_URL)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StorefrontError)
    async def storefront_error_handler(request: Request, exc: StorefrontError):
        logger.error("%s on %s %s: %s", type(exc).__name__, request.method, request.url.path, exc)
        return JSONResponse(status_code=exc.status_code, content={"detail": get_error_message(exc)})

    # Rejestracja routerów
    app.include_router(auth_router)
    app.include_router(shop_router)
    app.include_router(cart_router)
    app.include_router(products_router)
    app.include_router(banners_router)
    app.include_router(orders_router)
    app.include_router(content_router)
    app.include_router(settings_router)
    app.include_router(stats_router)
    app.include_router(logs_router)

    @app.get("/")
    def read_root():
        return {"message": f"{app.state.settings_cache.get().store_name} API is running"}

    return app


app = create_app()
