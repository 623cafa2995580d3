from fastapi import FastAPI, Request
import uuid
from contextlib import asynccontextmanager
from app.core.config import config, get_settings
from app.core.logging import setup_logging, set_correlation_id, get_logger, log_with_context
from app.clients.chat_completion import ChatCompletionClient
from app.services.ingredient import IngredientService
from app.routers import ingredients, admin

# Configure structured logging
setup_logging(config.log_level)
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown"""
    logger.info("Application starting up")

    # Fails fast when the API key is missing
    settings = get_settings()
    completion_client = ChatCompletionClient(
        api_key=settings.require_api_key(),
        model=settings.openai_model,
        api_url=settings.openai_api_url,
        timeout=settings.openai_timeout
    )
    app.state.completion_client = completion_client
    app.state.ingredient_service = IngredientService(completion_client)

    log_with_context(
        logger, "info", "Application startup complete",
        model=settings.openai_model,
        timeout=settings.openai_timeout
    )

    yield

    logger.info("Application shutting down")

    await completion_client.aclose()
    app.state.completion_client = None
    app.state.ingredient_service = None

    logger.info("Application shutdown complete")


app = FastAPI(
    title=config.title,
    description=config.description,
    version=config.version,
    lifespan=lifespan
)


@app.middleware("http")
async def add_correlation_id(request: Request, call_next):
    """Add correlation ID to all requests for tracing"""
    correlation_id = request.headers.get("X-Correlation-ID") or str(uuid.uuid4())
    set_correlation_id(correlation_id)

    response = await call_next(request)
    response.headers["X-Correlation-ID"] = correlation_id

    return response


# Include routers
app.include_router(ingredients.router)
app.include_router(admin.router)


@app.get("/")
async def root():
    """Root endpoint for API status"""
    logger.info("Root endpoint accessed")
    return {"message": f"{config.title} API is running", "version": config.version}
