from collections.abc import Callable
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse
from jinja2 import Environment, FileSystemLoader, select_autoescape
from loguru import logger

from app.api.deps import OrchestratorCurrent
from app.api.main import api_router
from app.core.constants import EXAMPLE_PROMPTS
from app.services.conversation import ConversationOrchestrator
from app.services.gemini import GeminiService
from app.services.podchaser.client import PodchaserClient
from app.services.podchaser.service import PodcastSearchService
from app.services.responder import ContextualResponder, new_session_store
from app.services.topic_extractor import TopicExtractor

from .config import settings
from .version import __version__

# app/core/app.py -> app/core -> app
templates_dir = Path(__file__).resolve().parent.parent / "templates"
jinja_env = Environment(loader=FileSystemLoader(str(templates_dir)), autoescape=select_autoescape(["html"]))


def build_orchestrator() -> ConversationOrchestrator:
    """Wire the production services from settings."""
    if not settings.PODCHASER_API_KEY:
        logger.warning("PODCHASER_API_KEY not set. Podcast searches will fail.")

    gemini = GeminiService()
    podchaser = PodchaserClient(
        api_key=settings.PODCHASER_API_KEY,
        url=settings.PODCHASER_API_URL,
        timeout=settings.PODCHASER_TIMEOUT_SECONDS,
    )
    sessions = new_session_store(gemini, idle_ttl=settings.SESSION_IDLE_TTL_SECONDS)
    return ConversationOrchestrator(
        extractor=TopicExtractor(gemini),
        search=PodcastSearchService(podchaser),
        responder=ContextualResponder(gemini, sessions),
        session_key=settings.DEFAULT_SESSION_KEY,
    )


def create_app(orchestrator_factory: Callable[[], ConversationOrchestrator] = build_orchestrator) -> FastAPI:
    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Manage application lifespan events (startup/shutdown).
        """
        app.state.orchestrator = orchestrator_factory()
        logger.info(f"{settings.APP_NAME} {__version__} ready")
        yield
        try:
            await app.state.orchestrator.close()
            logger.info("Podcast search client closed")
        except Exception as exc:
            logger.warning(f"Failed to close podcast search client: {exc}")

    app = FastAPI(
        title=settings.APP_NAME,
        description="Podcast recommendations from a chat about your mood",
        version=__version__,
        lifespan=lifespan,
        docs_url=None if settings.APP_ENV != "development" else "/docs",
        redoc_url=None if settings.APP_ENV != "development" else "/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_class=HTMLResponse)
    async def chat_page(request: Request, orchestrator: OrchestratorCurrent):
        template = jinja_env.get_template("index.html")
        html_content = template.render(
            request=request,
            app_name=settings.APP_NAME,
            app_version=__version__,
            examples=EXAMPLE_PROMPTS,
            initial_state=orchestrator.state.model_dump(mode="json"),
        )
        return HTMLResponse(content=html_content, media_type="text/html")

    app.include_router(api_router)
    return app


app = create_app()
