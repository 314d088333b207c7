from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.sessions import SessionMiddleware
import logging
from portal.auth import router as auth_router
from portal.analytics import router as analytics_router
from portal.categories import router as categories_router
from portal.feedback import router as feedback_router
from portal.health import router as health_router
from portal.review import router as review_router
from portal.web import router as web_router
from portal.config.settings import settings
from portal.errors import request_validation_handler
from portal.storage import get_store, init_store, normalize
from mangum import Mangum

# Configure logging for Lambda
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[logging.StreamHandler()]
)

# Force the root logger to INFO level explicitly
logging.getLogger().setLevel(logging.INFO)

# Prevent duplicate logs from uvicorn when running locally
if settings.APP_ENV != 'development':
    logging.getLogger("uvicorn.access").propagate = False
    logging.getLogger("uvicorn.error").propagate = False

logger = logging.getLogger(__name__)

def build_allowed_origins() -> list:
    """Local dev ports plus FRONTEND_URL, or every origin when ALLOW_ALL_ORIGINS is set."""
    if settings.ALLOW_ALL_ORIGINS:
        return ["*"]

    allowed_origins = [
        "http://localhost:3000",
        "http://localhost:3001",
        "http://localhost:5173", # Common port for local Vite dev
    ]

    frontend_url = settings.FRONTEND_URL
    if frontend_url:
        allowed_origins.append(frontend_url)
        # Also add without trailing slash if it exists
        if frontend_url.endswith("/"):
            allowed_origins.append(frontend_url.rstrip("/"))

    return allowed_origins

def create_app() -> FastAPI:
    """Create and configure a FastAPI application."""
    logger.info(f"Creating FastAPI app - Environment: {settings.APP_ENV}")

    app = FastAPI(
        title=settings.API_TITLE,
        description=settings.API_DESCRIPTION,
        version=settings.API_VERSION,
        docs_url=settings.API_DOCS_URL,
        redoc_url=settings.API_REDOC_URL,
        openapi_url=settings.API_OPENAPI_URL
    )

    @app.on_event("startup")
    async def startup_event():
        """Create the data files if needed and clean up legacy records"""
        logger.info("FastAPI application starting up...")
        try:
            store = get_store()
            init_store(store)
            normalize(store)
            logger.info(f"Application startup completed successfully - data dir: {store.data_dir}")
        except Exception as e:
            logger.error(f"Error during startup: {str(e)}")
            raise

    allowed_origins = build_allowed_origins()
    logger.info(f"CORS allowed origins: {allowed_origins}")

    # Enable CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Cross-site cookies need SameSite=None over HTTPS in production
    app.add_middleware(
        SessionMiddleware,
        secret_key=settings.SESSION_SECRET,
        max_age=settings.SESSION_MAX_AGE,
        same_site="none" if settings.is_production else "lax",
        https_only=settings.is_production,
    )

    app.add_exception_handler(RequestValidationError, request_validation_handler)

    # Include routers
    app.include_router(health_router.router)
    app.include_router(auth_router.router)
    app.include_router(categories_router.router)
    app.include_router(feedback_router.router)
    app.include_router(review_router.router)
    app.include_router(analytics_router.router)
    app.include_router(web_router.router)

    logger.info("FastAPI app created successfully")
    return app

_fastapi_app = create_app()

# Conditionally wrap with Mangum for serverless deployment
if settings.APP_ENV != 'development':
    logger.info("Wrapping FastAPI app with Mangum for Lambda")
    app = Mangum(_fastapi_app)
else:
    app = _fastapi_app # Use the raw FastAPI app for local dev

# For local development
if __name__ == '__main__':
    import uvicorn

    port = settings.PORT
    print(f"Starting FastAPI server on port {port}...")
    print(f"Environment: {settings.APP_ENV}")
    print(f"API Documentation: http://localhost:{port}{settings.API_DOCS_URL}")

    uvicorn.run(_fastapi_app,
                host="0.0.0.0",
                port=port,
                log_level="info",
                access_log=False)
