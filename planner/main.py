import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import CORS_ORIGINS, LOG_LEVEL
from .database import create_tables
from .errors import install_error_handlers
from .routers import health_log, subjects, todos, work_sessions

logging.basicConfig(level=LOG_LEVEL, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create tables on startup."""
    create_tables()
    logger.info("Planner API started")
    yield


# Create FastAPI app
app = FastAPI(
    title="Planner API",
    description="Todo hierarchy, work sessions and health log for the productivity workspace",
    version="1.0.0",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

install_error_handlers(app)

# Include routers
app.include_router(todos.router, prefix="/api", tags=["todos"])
app.include_router(work_sessions.router, prefix="/api", tags=["sessions"])
app.include_router(health_log.router, prefix="/api", tags=["healthlog"])
app.include_router(subjects.router, prefix="/api", tags=["ai"])

@app.get("/")
def read_root():
    return {"message": "Planner API"}

@app.get("/health")
def health_check():
    return {"status": "healthy"}
