from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles
from catalog_io.core.config import settings
from catalog_io.core.logging import configure_logging, logger
from catalog_io.api.router import api_router
from catalog_io.services.files import ensure_dirs

def create_app() -> FastAPI:
    configure_logging(settings.ENV, settings.LOG_LEVEL)
    app = FastAPI(title="Catalog CSV import/export", version="0.1.0")

    origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins or ["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.on_event("startup")
    def _startup():
        ensure_dirs()
        # Ensure tables exist for dev-only convenience; in prod rely on alembic
        if settings.ENV == "dev":
            from catalog_io.db.base import Base
            from catalog_io.db.session import engine
            import catalog_io.db.models  # noqa: F401
            Base.metadata.create_all(bind=engine)

    app.include_router(api_router)
    # report and export files are served from the blob root
    app.mount("/blobs", StaticFiles(directory=settings.BLOB_ROOT, check_dir=False), name="blobs")
    logger.info("app_started", env=settings.ENV)
    return app

app = create_app()
