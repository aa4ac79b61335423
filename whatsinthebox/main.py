"""FastAPI application entry point."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError

from whatsinthebox.config import settings
from whatsinthebox.database import init_db
from whatsinthebox.navigation import Navigator
from whatsinthebox.routes import boxes, items, qr_codes, navigation, deep_links
from whatsinthebox.services.box_qr import BoxQRFeature
from whatsinthebox.services.photo_store import PhotoStore
from whatsinthebox.services.qr_code import QRCodeService

logger = logging.getLogger(__name__)


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # The app cannot work without its store
    try:
        init_db()
    except SQLAlchemyError:
        logger.critical("Could not initialise the database at %s", settings.DATABASE_URL, exc_info=True)
        raise SystemExit(1)
    yield


def create_app(init_storage: bool = True) -> FastAPI:
    """Build the application and its per-process services."""
    app = FastAPI(
        title=settings.APP_NAME,
        version=settings.APP_VERSION,
        description="Catalog storage boxes and their contents, with QR codes that open each box",
        lifespan=lifespan if init_storage else None,
    )
    
    qr_service = QRCodeService()
    app.state.scheme = settings.APP_SCHEME
    app.state.qr_service = qr_service
    app.state.box_qr = BoxQRFeature(qr_service, settings.APP_SCHEME, logo_size=settings.QR_LOGO_SIZE)
    app.state.photo_store = PhotoStore(settings.PHOTOS_DIR, quality=settings.PHOTO_JPEG_QUALITY)
    app.state.navigator = Navigator(settings.APP_SCHEME)
    
    # CORS middleware
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    
    # Include routers
    app.include_router(boxes.router, prefix="/api")
    app.include_router(items.router, prefix="/api")
    app.include_router(qr_codes.router, prefix="/api")
    app.include_router(navigation.router, prefix="/api")
    app.include_router(deep_links.router, prefix="/api")
    
    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}
    
    return app


configure_logging()
app = create_app()
