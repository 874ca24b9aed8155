"""
LightAI - chat relay service.
FastAPI application exposing the responder policy over HTTP.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import __version__
from .config import Settings
from .models import ChatResponse, ErrorResponse, ServiceInfo
from .responders import ResponderPolicy, build_provider

logger = logging.getLogger(__name__)

MISSING_MESSAGE = "missing `message` in JSON body"
INSTRUCTIONS = 'POST /chat { "message": "..." } or run `python -m lightai --cli` for REPL'


def configure_logging(app_settings: Settings) -> None:
    """Configure root logging once for either surface."""
    handlers = [logging.StreamHandler()]
    if app_settings.log_file:
        handlers.append(logging.FileHandler(app_settings.log_file))
    logging.basicConfig(
        level=getattr(logging, app_settings.log_level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=handlers,
    )


def wants_remote(body: dict, header_value: Optional[str]) -> bool:
    """Per-request routing override from the JSON body or the x-use-openai header."""
    header_flag = (header_value or "").strip().lower()
    body_flag = bool(body.get("use_openai") or body.get("useOpenAI"))
    return body_flag or header_flag in ("1", "true")


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=ErrorResponse(error=message).model_dump())


def create_app(app_settings: Optional[Settings] = None, policy: Optional[ResponderPolicy] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Also usable as a uvicorn factory: ``uvicorn --factory lightai.main:create_app``.

    The provider handle is created here, once per process, and handed to the
    policy explicitly. Tests pass their own policy instead.
    """
    if app_settings is None:
        app_settings = Settings()
    if policy is None:
        policy = ResponderPolicy.from_settings(app_settings, build_provider(app_settings))

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Lifespan context manager for startup/shutdown."""
        logger.info(
            f"LightAI v{__version__} starting "
            f"(openai_available={policy.provider_available}, use_openai={policy.remote_enabled})"
        )
        yield
        logger.info("Shutting down LightAI...")
        await policy.close()

    app = FastAPI(
        title="LightAI",
        description="Chat relay with a local responder and an optional OpenAI backend",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.policy = policy

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/", response_model=ServiceInfo)
    async def root(request: Request):
        """Service descriptor."""
        return ServiceInfo(
            name="LightAI",
            version=__version__,
            openai_available=request.app.state.policy.provider_available,
            instructions=INSTRUCTIONS,
        )

    @app.post(
        "/chat",
        response_model=ChatResponse,
        responses={400: {"model": ErrorResponse}, 500: {"model": ErrorResponse}},
    )
    async def chat(request: Request):
        """
        Reply to a single message.

        Body: {"message": "..."} (or "msg"), optional "use_openai"/"useOpenAI".
        Header: x-use-openai: 1|true forces the remote backend.
        """
        try:
            body = await request.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            return _error(400, MISSING_MESSAGE)

        message = body.get("message") or body.get("msg")
        if not message:
            return _error(400, MISSING_MESSAGE)

        try:
            use_remote = wants_remote(body, request.headers.get("x-use-openai"))
            reply = await request.app.state.policy.get_reply(str(message), use_remote=use_remote)
            return ChatResponse(reply=reply.reply, source=reply.source)
        except Exception as exc:
            logger.error(f"Chat request failed: {exc}", exc_info=True)
            return _error(500, str(exc) or type(exc).__name__)

    return app

