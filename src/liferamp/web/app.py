"""FastAPI application for the liferamp web interface."""

from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import Depends, FastAPI, Request
from fastapi.responses import RedirectResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from .. import __version__
from ..clients.auth import AuthClient, AuthUser, SupabaseAuthClient
from ..clients.llm import ChatModel, OpenAIChatModel
from ..config import Settings, configure_logging
from ..db.engine import get_db_path, init_db
from ..db.repositories import ProfileRepository
from ..models.gameplan import GoalStatus
from .deps import ApiUnauthorized, SignInRequired, current_user, json_error
from .routers import auth, chat, gameplans, ingest, portfolio, profile


# Template and static file paths
TEMPLATES_DIR = Path(__file__).parent / "templates"
STATIC_DIR = Path(__file__).parent / "static"


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler - runs on startup and shutdown."""
    await init_db(app.state.db_path)
    yield


def _default_chat_model(settings: Settings) -> ChatModel | None:
    if not settings.openai_api_key:
        return None
    return OpenAIChatModel(
        api_key=settings.openai_api_key,
        model=settings.openai_model,
        temperature=settings.openai_temperature,
    )


def create_app(
    settings: Settings | None = None,
    auth_client: AuthClient | None = None,
    chat_model: ChatModel | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Args:
        settings: Settings to use (default: read from the environment)
        auth_client: Auth provider (default: Supabase from settings)
        chat_model: LLM (default: OpenAI from settings, None without a key)
    """
    settings = settings or Settings.from_env()
    configure_logging(settings.log_level)

    app = FastAPI(
        title="liferamp",
        description="AI coaching with weekly gameplans",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.db_path = get_db_path(settings.data_dir)
    app.state.auth_client = auth_client or SupabaseAuthClient(
        settings.supabase_url, settings.supabase_anon_key
    )
    app.state.chat_model = chat_model if chat_model is not None else _default_chat_model(settings)

    # Mount static files
    if STATIC_DIR.exists():
        app.mount("/static", StaticFiles(directory=STATIC_DIR), name="static")

    templates = Jinja2Templates(directory=TEMPLATES_DIR)
    templates.env.globals["goal_statuses"] = list(GoalStatus)
    app.state.templates = templates

    @app.exception_handler(SignInRequired)
    async def sign_in_required(request: Request, exc: SignInRequired):
        return RedirectResponse(url="/signin", status_code=302)

    @app.exception_handler(ApiUnauthorized)
    async def api_unauthorized(request: Request, exc: ApiUnauthorized):
        return json_error(401, "Unauthorized")

    app.include_router(auth.router)
    app.include_router(profile.router)
    app.include_router(chat.router)
    app.include_router(gameplans.router)
    app.include_router(portfolio.router)
    app.include_router(ingest.router)

    @app.get("/")
    async def root(request: Request, user: AuthUser | None = Depends(current_user)):
        """Send the user to sign-in, profile setup or chat."""
        if user is None:
            return RedirectResponse(url="/signin", status_code=302)
        profile_repo = ProfileRepository(request.app.state.db_path)
        if not await profile_repo.exists(user.id):
            return RedirectResponse(url="/profile", status_code=302)
        return RedirectResponse(url="/chat", status_code=302)

    @app.get("/health")
    async def health():
        """Health check endpoint."""
        return {"status": "healthy", "version": __version__}

    return app
