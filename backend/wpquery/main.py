import logging

from fastapi import FastAPI

from wpquery import __version__
from wpquery.database import dispose_engine, get_query_service
from wpquery.routes import menus, posts, viewer

logger = logging.getLogger(__name__)

APP_NAME = "WordPress Query API"

app = FastAPI(title=APP_NAME, version=__version__)

# Include routers (all read-only)
app.include_router(viewer.router, prefix="/api", tags=["viewer"])
app.include_router(posts.router, prefix="/api", tags=["posts"])
app.include_router(menus.router, prefix="/api", tags=["menus"])


@app.on_event("startup")
def on_startup():
    # Fail fast on bad settings: no query can run without a store
    service = get_query_service()
    logger.info("Serving tables with prefix %r", service.settings.wp_prefix)
    for r in app.routes:
        path = getattr(r, "path", None)
        methods = getattr(r, "methods", None)
        if path:
            logger.debug("%-10s %s", ", ".join(sorted(methods)) if methods else "N/A", path)


@app.on_event("shutdown")
async def on_shutdown():
    await dispose_engine()


@app.get("/api/health")
def health_check():
    """Diagnostic endpoint to verify which code is running"""
    return {"app_name": APP_NAME, "version": __version__, "status": "healthy"}
