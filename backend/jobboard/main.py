import logging
import sqlite3
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from jobboard.config import settings
from jobboard.routers import applications, auth, jobs

logger = logging.getLogger("jobboard")


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: create the data directories and schema, then integrity-check
    try:
        from jobboard.database import init_db
        from jobboard.utils.filesystem import ensure_data_dirs
        ensure_data_dirs()
        init_db()
        conn = sqlite3.connect(str(settings.db_path))
        result = conn.execute("PRAGMA integrity_check").fetchone()
        conn.close()
        if result and result[0] == "ok":
            logger.info("Database integrity check passed.")
        else:
            logger.error("DATABASE INTEGRITY CHECK FAILED: %s", result)
    except (OSError, sqlite3.Error) as exc:
        logger.error("Could not prepare database at %s: %s", settings.db_path, exc)
    yield
    # Shutdown: issued tokens do not outlive the process
    from jobboard.services.auth_service import auth_service
    auth_service.revoke_all()


app = FastAPI(
    title="Job Board",
    description="Job postings with owner-gated editing and candidate applications",
    version="0.1.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router, prefix=settings.api_prefix)
app.include_router(jobs.router, prefix=settings.api_prefix)
app.include_router(applications.router, prefix=settings.api_prefix)


@app.get("/health")
async def health():
    return {"status": "ok", "version": "0.1.0"}
