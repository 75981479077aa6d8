import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from photo_api.utils.app_logging import configure_logging
from photo_api.utils.config import settings
from photo_api.utils.errors import register_error_handlers
from photo_api.db import engine, Base
from photo_api.routes.auth import router as auth_router
from photo_api.routes.photos import router as photos_router


configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger("photo_api.requests")

app = FastAPI(title="Photo API", version="0.1.0")

# Ensure models are imported and tables are created at import time (helps tests)
import photo_api.models  # noqa: F401,E402
Base.metadata.create_all(bind=engine)


@app.get("/health")
def health_check():
    return {"status": "ok"}


@app.middleware("http")
async def log_requests(request: Request, call_next):
    resp = await call_next(request)
    logger.info("%s %s -> %s", request.method,
                request.url.path, resp.status_code)
    return resp


# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

# Routers
app.include_router(auth_router)
app.include_router(photos_router)
