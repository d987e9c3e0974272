"""FastAPI application with lifespan, CORS, and health endpoint."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware

from slack_knowledge.api import router as api_router
from slack_knowledge.api import validation_exception_handler
from slack_knowledge.config import get_settings
from slack_knowledge.llm.classifier import KnowledgeClassifier
from slack_knowledge.logging_config import configure_logging
from slack_knowledge.models.api import HealthResponse
from slack_knowledge.slack.extractor import SlackExtractor
from slack_knowledge.store import KnowledgeStore


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan: configure logging and build the service components once."""
    settings = get_settings()
    configure_logging(settings.log_level)
    app.state.settings = settings
    app.state.extractor = SlackExtractor(settings)
    app.state.classifier = KnowledgeClassifier(settings)
    app.state.store = KnowledgeStore(settings)
    yield


app = FastAPI(
    title="Slack Knowledge",
    lifespan=lifespan,
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_settings().cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.include_router(api_router)


@app.get("/health", response_model=HealthResponse)
async def health():
    """Liveness check."""
    return {"status": "ok", "message": "Server is running"}
