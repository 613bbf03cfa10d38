from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.status import HTTP_503_SERVICE_UNAVAILABLE
from bookstore.api.deps import DbSession
from bookstore.core.config import settings
from bookstore.core.errors import PersistenceError, register_exception_handlers
from bookstore.core.logging import get_logger, setup_logging
from bookstore.core.middleware_request import RequestContextMiddleware
from bookstore.db.session import init_db, ping
from bookstore.schemas.common import HealthResponse


# Routers
from fastapi import APIRouter
from bookstore.api.routes.authors import router as authors_router
from bookstore.api.routes.books import router as books_router
from bookstore.api.routes.books_with_authors import router as books_with_authors_router


setup_logging(settings.LOG_LEVEL)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    logger.info("Starting %s %s", settings.PROJECT_NAME, settings.VERSION)
    init_db()
    for route in api.routes:
        methods = ",".join(sorted(getattr(route, "methods", None) or ()))
        logger.info("  %-7s %s", methods, getattr(route, "path", ""))
    yield
    logger.info("Shutting down %s", settings.PROJECT_NAME)


app = FastAPI(
    title=settings.PROJECT_NAME,
    description="Bookstore Inventory API - CRUD and search over books and authors.",
    version=settings.VERSION,
    openapi_url=f"{settings.API_PREFIX}/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestContextMiddleware)

# Root endpoint
@app.get("/")
async def root():
    """API root endpoint with basic information."""
    return {
        "message": f"Welcome to {settings.PROJECT_NAME}",
        "version": settings.VERSION,
        "docs_url": "/docs",
        "api_prefix": settings.API_PREFIX,
        "endpoints": {
            "books": f"{settings.API_PREFIX}/books",
            "authors": f"{settings.API_PREFIX}/authors",
            "books_with_authors": f"{settings.API_PREFIX}/books-with-authors",
        },
    }


@app.get("/health", response_model=HealthResponse, response_model_exclude_none=True)
def health(db: DbSession):
    """Store connectivity probe."""
    try:
        ping(db)
    except PersistenceError as e:
        logger.error("Health check failed: %s", e.__cause__ or e)
        body = HealthResponse(status="unhealthy", error=e.message)
        return JSONResponse(
            status_code=HTTP_503_SERVICE_UNAVAILABLE,
            content=body.model_dump(exclude_none=True),
        )
    return HealthResponse(status="healthy", database="reachable")

register_exception_handlers(app)

# Mount routers
api = APIRouter(prefix=settings.API_PREFIX)
api.include_router(authors_router)
api.include_router(books_router)
api.include_router(books_with_authors_router)
app.include_router(api)


def run() -> None:
    import uvicorn

    uvicorn.run("bookstore.main:app", host=settings.HOST, port=settings.PORT)
