from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .routers import folders, search
from .routers import dependencies
from .routers.dependencies import initialize_services, shutdown_services
from .api.exceptions import FolderTreeError, handle_business_exception
from .core.config import CORS_ORIGINS, ENVIRONMENT, FILESYSTEM_TYPE, PROJECTS_ROOT, TREE_STORE_TYPE
from .core.logging_config import setup_logging, get_logger

# Initialize logging
setup_logging()
logger = get_logger(__name__)

app = FastAPI(
    title="Folder Tree API",
    description="Nested folder organization for projects, mirrored on the filesystem",
    version="1.0.0",
    docs_url=None if ENVIRONMENT == "production" else "/docs"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(FolderTreeError)
async def folder_tree_exception_handler(request: Request, exc: FolderTreeError):
    """Convert business exceptions into JSON error responses."""
    http_exception = handle_business_exception(exc)
    if http_exception.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc}")
    else:
        logger.warning(f"{request.method} {request.url.path} rejected: {exc}")
    
    return JSONResponse(
        status_code=http_exception.status_code,
        content={
            "error": http_exception.detail,
            "status_code": http_exception.status_code,
            "path": request.url.path
        }
    )


# Register routers with API versioning
app.include_router(folders.router, prefix="/api/v1", tags=["Folders"])
app.include_router(search.router, prefix="/api/v1", tags=["Search"])

# Also register without version prefix
app.include_router(folders.router, tags=["Folders"])
app.include_router(search.router, tags=["Search"])


@app.get("/health", tags=["Health"])
async def health_check():
    """Liveness check."""
    return {"status": "healthy"}


@app.on_event("startup")
async def startup_event():
    """Initialize application on startup."""
    logger.info("=" * 60)
    logger.info("Starting Folder Tree Backend...")
    logger.info("=" * 60)
    logger.info(f"  → Environment: {ENVIRONMENT}")
    logger.info(f"  → Filesystem: {FILESYSTEM_TYPE.upper()}")
    logger.info(f"  → Projects root: {PROJECTS_ROOT}")
    logger.info(f"  → Tree store: {TREE_STORE_TYPE.upper()}")
    logger.info(f"  → Allowed Origins: {', '.join(CORS_ORIGINS)}")
    
    # Services may already be wired (tests inject in-memory adapters)
    if dependencies.tree_service is None:
        await initialize_services()
    
    logger.info("✅ Folder Tree Backend initialized successfully")


@app.on_event("shutdown")
async def shutdown_event():
    """Cleanup on shutdown."""
    logger.info("Shutting down Folder Tree Backend...")
    await shutdown_services()
    logger.info("Folder Tree Backend shutdown complete")
