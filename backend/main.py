import logging
from typing import Literal

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from coach.config import Settings
from coach.errors import MediatorError, MisconfiguredError
from coach.mediator import CompletionMediator
from coach.models import BusinessContext, Message
from coach.prompts import MODE_CARDS

# Configure logging immediately so module-level startup logs are visible
# during process startup.
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s %(message)s"
)
logger = logging.getLogger("coach_backend")

app = FastAPI(title="Marketing Coach Agent")

# Allow CORS for all origins (development convenience)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

settings = Settings.from_env()
mediator = CompletionMediator.from_settings(settings)

CONFIG_ERROR = "API key not configured"
GENERIC_ERROR = "Failed to process request"

# Emit a non-secret startup diagnostic so platform logs show whether the
# provider key is present in-process.
logger.info(
    "Startup provider status: api_key_present=%s, model=%s",
    mediator.configured,
    settings.model,
)


class ChatMessage(BaseModel):
    role: Literal["user", "assistant"]
    content: str


class BusinessInfo(BaseModel):
    industry: str = ""
    targetAudience: str = ""
    product: str = ""


class AgentRequest(BaseModel):
    mode: str
    messages: list[ChatMessage]
    businessInfo: BusinessInfo


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": message})


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError):
    # Every failure is a 500 with an opaque body; a missing key wins over a bad body.
    logger.error("Rejected malformed %s body: %s", request.url.path, exc.errors())
    if not mediator.configured:
        return _error_response(CONFIG_ERROR)
    return _error_response(GENERIC_ERROR)


@app.get("/healthz")
async def healthz():
    return {"status": "ok"}


@app.get("/admin/provider-status")
async def provider_status():
    """Non-secret view of the provider configuration in the running process."""
    return {
        "api_key_present": mediator.configured,
        "model": mediator.client.model,
    }


@app.get("/modes")
async def list_modes():
    return {
        "modes": [
            {"id": c.mode.value, "title": c.title, "description": c.description}
            for c in MODE_CARDS
        ]
    }


@app.post("/api/agent")
async def agent(req: AgentRequest):
    logger.info(
        "/api/agent received: mode=%s messages=%d", req.mode, len(req.messages)
    )
    context = BusinessContext.from_dict(req.businessInfo.model_dump())
    messages = [Message(role=m.role, content=m.content) for m in req.messages]
    try:
        reply = await mediator.complete(req.mode, messages, context)
    except MisconfiguredError:
        logger.error("Provider API key is not configured")
        return _error_response(CONFIG_ERROR)
    except MediatorError as e:
        logger.exception("Error in agent route (kind=%s): %s", e.kind, e)
        return _error_response(GENERIC_ERROR)
    except Exception as e:
        logger.error(f"Unexpected error in agent route: {e}", exc_info=True)
        return _error_response(GENERIC_ERROR)
    logger.info("Reply sent (len=%d)", len(reply))
    return {"response": reply}
