import logging
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from painpal.core.config import Settings, settings
from painpal.core.exceptions import register_exception_handlers
from painpal.services.companion import CompletionClient, OpenAICompletionClient
from painpal.storage import Storage, build_storage
from painpal.api.routers import users, pain_logs, mood_logs, interventions, chat, summary

logger = logging.getLogger(__name__)


def create_app(
    storage: Optional[Storage] = None,
    completion_client: Optional[CompletionClient] = None,
    config: Settings = settings,
) -> FastAPI:
    """
    Build the API around an explicit storage backend and completion client.

    Either collaborator defaults to the one named by ``config``.
    """

    # =====================================================================
    # CREATE APP
    # =====================================================================

    app = FastAPI(
        title=config.APP_NAME,
        debug=config.DEBUG,
        description="Pain, mood & habit tracking with an AI companion",
        version="1.0.0",
    )

    # =====================================================================
    # CORS MIDDLEWARE
    # =====================================================================

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )
    logger.info(f"CORS allowed origins: {config.CORS_ORIGINS}")

    # =====================================================================
    # COLLABORATORS
    # =====================================================================

    app.state.storage = storage if storage is not None else build_storage(config)
    app.state.completion_client = (
        completion_client
        if completion_client is not None
        else OpenAICompletionClient(api_key=config.OPENAI_API_KEY, model=config.OPENAI_MODEL)
    )

    register_exception_handlers(app)

    # =====================================================================
    # HEALTH CHECK
    # =====================================================================

    @app.get("/health")
    def health_check():
        """Health check endpoint."""
        return {"status": "healthy"}

    # =====================================================================
    # ROUTES
    # =====================================================================

    app.include_router(users.router)
    app.include_router(pain_logs.router)
    app.include_router(mood_logs.router)
    app.include_router(interventions.router)
    app.include_router(chat.router)
    app.include_router(summary.router)

    @app.get("/")
    def root():
        """API root endpoint."""
        return {
            "message": f"Welcome to {config.APP_NAME}",
            "version": "1.0.0",
            "docs": "/docs",
            "endpoints": {
                "users": "/api/users",
                "pain_logs": "/api/pain-logs",
                "mood_logs": "/api/mood-logs",
                "interventions": "/api/interventions",
                "chat": "/api/chat",
                "summary": "/api/summary",
            },
        }

    return app


logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = create_app()
