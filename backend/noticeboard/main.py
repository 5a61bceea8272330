# noticeboard/main.py
import os
from pathlib import Path

from fastapi import Depends, FastAPI, HTTPException, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import FileResponse
from fastapi.staticfiles import StaticFiles

from noticeboard.config import Settings, settings as default_settings
from noticeboard.api.deps import get_database
from noticeboard.api.routers import auth, notices


def create_app(settings: Settings | None = None, db=None, boot=None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        settings: Configuration (module-level settings by default)
        db: Persistence handle from core.db.init_db, exposed as app.state.db
        boot: The Bootstrap running this app, reported by /healthz
    """
    settings = settings or default_settings
    app = FastAPI(title=settings.APP_NAME)
    app.state.settings = settings
    app.state.db = db
    app.state.boot = boot

    # CORS (open by default; the frontend is normally served from this app)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # REST
    app.include_router(auth.router, prefix="/api")
    app.include_router(notices.router, prefix="/api")

    @app.get("/healthz")
    def healthz(database=Depends(get_database)):
        """
        Liveness plus startup outcome. `degraded` is true when the listener
        came up after the default-account seed failed.
        """
        body = {"ok": True, "database": database.name if database is not None else None}
        if boot is not None:
            seed = boot.seed_result
            body.update({
                "state": boot.state.value,
                "seed": seed.status.value if seed else None,
                "seedError": seed.error if seed else None,
                "degraded": boot.degraded,
            })
        return body

    # Uploaded files (images, PDFs)
    os.makedirs(settings.upload_dir, exist_ok=True)
    app.mount("/uploads", StaticFiles(directory=settings.upload_dir), name="uploads")

    # Frontend files, falling back to the login page for unknown paths
    public_root = Path(settings.public_dir).resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def frontend(full_path: str):
        candidate = (public_root / full_path).resolve()
        if full_path and candidate.is_file() and candidate.is_relative_to(public_root):
            return FileResponse(candidate)
        index = public_root / "index.html"
        if not index.is_file():
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="NOT_FOUND")
        return FileResponse(index)

    return app
