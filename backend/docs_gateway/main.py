"""FastAPI application for the Microsoft Docs gateway."""
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse

from .core.config import settings
from .api.routes import docs, endpoints
from .dependencies.docs import init_docs_service, shutdown_docs_service

# Configure logging
logging.basicConfig(
    level=logging.INFO if settings.debug else logging.WARNING,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logging.getLogger("mcp").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)
logger = logging.getLogger(__name__)

SERVICE_NAME = "Enterprise MCP Integration API"
SERVICE_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    # Startup
    logger.info("Starting Microsoft Docs gateway...")
    try:
        init_docs_service(settings)
        logger.info("Microsoft Docs service initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize application: {e}")
        raise

    yield

    # Shutdown
    logger.info("Shutting down Microsoft Docs gateway...")
    await shutdown_docs_service()


# Create FastAPI app
app = FastAPI(
    title=SERVICE_NAME,
    description="Microsoft documentation search over the Model Context Protocol",
    version=SERVICE_VERSION,
    lifespan=lifespan
)


app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log each request and its response status."""
    logger.info(f"Incoming request: {request.method} {request.url.path}")
    response = await call_next(request)
    logger.info(
        f"Completed request: {request.method} {request.url.path} -> {response.status_code}"
    )
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Answer malformed request bodies with a plain 400."""
    logger.info(f"Rejected invalid request to {request.url.path}: {exc.errors()}")
    return PlainTextResponse(
        "Invalid request: query is required and cannot exceed 500 characters",
        status_code=status.HTTP_400_BAD_REQUEST,
    )


# Include routers
app.include_router(docs.router)
app.include_router(endpoints.router)


@app.get("/", tags=["info"])
async def root():
    """Root endpoint."""
    return {
        "service": SERVICE_NAME,
        "version": SERVICE_VERSION,
        "status": "Running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "endpoints": [
            "/api/msdocsping - POST - Search Microsoft documentation",
            "/api/endpoints - GET - Registered MCP endpoints",
            "/docs - API documentation"
        ]
    }

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "docs_gateway.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug
    )
