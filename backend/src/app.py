# backend/src/app.py

import logging
from contextlib import asynccontextmanager
import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.middleware.base import BaseHTTPMiddleware

from src.core.schemas import ExplainRequest, ExplainResponse
from src.core.settings import load_settings
from src.core.gemini_explainer import request_explanation

# ------------------------------------------------------------
# Setup
# ------------------------------------------------------------
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger("quiz")

# One pooled Gemini client for the app lifetime
@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.http_client = httpx.AsyncClient(timeout=app.state.settings.timeout)
    logger.info("Gemini HTTP client opened.")
    try:
        yield
    finally:
        await app.state.http_client.aclose()
        logger.info("Gemini HTTP client closed.")

app = FastAPI(title="Quiz Explanation API", lifespan=lifespan)
app.state.settings = load_settings()

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)

# Middleware to log requests
class LogRequestMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next):
        try:
            body = await request.body()
            logger.info(
                f"Incoming {request.method} {request.url.path} body={body.decode('utf-8')}"
            )
        except Exception:
            logger.warning("Could not read request body")
        return await call_next(request)

app.add_middleware(LogRequestMiddleware)

# ------------------------------------------------------------
# Exception handlers
# ------------------------------------------------------------
@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.error(f"Validation error: {exc.errors()} body={exc.body}")
    return JSONResponse(
        status_code=422,
        content={
            "status": "error",
            "detail": exc.errors(),
            "body": exc.body,
        },
    )

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled exception: {exc}", exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"status": "error", "message": str(exc)},
    )

# ------------------------------------------------------------
# Routes
# ------------------------------------------------------------
@app.post("/explain", response_model=ExplainResponse)
async def explain_route(req: ExplainRequest):
    explanation = await request_explanation(
        req.question,
        req.user_answer,
        req.correct_answer,
        req.all_answers,
        settings=app.state.settings,
        client=app.state.http_client,
    )
    logger.debug(f"Explanation for question={req.question!r}: {explanation[:80]}")
    return {"status": "ok", "explanation": explanation}

@app.get("/healthz")
def healthz():
    return {"ok": True, "gemini_configured": bool(app.state.settings.api_key)}
