import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import API_PREFIX, CORS_ORIGINS, LOG_LEVEL
from .database import create_tables
from .exceptions import (
    TaskFolderError,
    http_exception_handler,
    request_validation_exception_handler,
    store_exception_handler,
    task_folder_exception_handler,
)
from .routers import auth, folders, tasks

# Configure logging
logging.basicConfig(
    level=getattr(logging, LOG_LEVEL, logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Create tables on startup
    create_tables()
    logger.info("Task & Folder API started")
    yield
    logger.info("Task & Folder API stopped")


# Create FastAPI app
app = FastAPI(
    title="Task & Folder API",
    description="Multi-user task and folder management API",
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

app.add_exception_handler(TaskFolderError, task_folder_exception_handler)
app.add_exception_handler(RequestValidationError, request_validation_exception_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(SQLAlchemyError, store_exception_handler)

# Include routers
app.include_router(auth.router, prefix=f"{API_PREFIX}/auth", tags=["auth"])
app.include_router(tasks.router, prefix=API_PREFIX, tags=["tasks"])
app.include_router(folders.router, prefix=API_PREFIX, tags=["folders"])


@app.get("/")
def read_root():
    return {"message": "Task & Folder API"}


@app.get("/health")
def health_check():
    return {"status": "healthy"}
