import logging

from fastapi import FastAPI, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from zootel.api.v1.api import api_router
from zootel.core.config import settings
from zootel.core.database import check_connection, init_db
from zootel.core.errors import register_exception_handlers

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=settings.PROJECT_NAME,
    openapi_url=f"{settings.API_PREFIX}/openapi.json"
)

# Set up CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_exception_handlers(app)


# Initialize database on startup
@app.on_event("startup")
def on_startup():
    if settings.AUTO_CREATE_TABLES:
        init_db()
    logger.info(f"{settings.PROJECT_NAME} started")


app.include_router(api_router, prefix=settings.API_PREFIX)


@app.get("/")
def read_root():
    return {"message": "Welcome to Zootel Marketplace API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}


@app.get("/ready")
def readiness_check():
    if not check_connection():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "unavailable", "database": "disconnected"},
        )
    return {"status": "ready", "database": "connected"}
