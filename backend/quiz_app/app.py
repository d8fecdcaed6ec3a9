import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from . import config
from .db import create_db_and_tables, dispose_engine
from .errors import QuizAppError, ValidationError
from .routers import auth, quiz_sets, questions, feedback
from .services.feedback_service import build_feedback_generator

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # run once when app starts: make tables and the Gemini client
    await create_db_and_tables()
    app.state.feedback_generator = build_feedback_generator(config.GEMINI_API_KEY, config.GEMINI_MODEL)
    if app.state.feedback_generator is None:
        logger.warning("GEMINI_API_KEY is not set. Gemini-based feedback is disabled until you add it.")
    yield
    await dispose_engine()


async def quiz_app_error_handler(request: Request, exc: QuizAppError):
    return JSONResponse(status_code=exc.status_code, content={"error": exc.message})


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    logger.info("Validation error on %s %s: %s", request.method, request.url.path, exc.errors())
    err = ValidationError()
    return JSONResponse(status_code=err.status_code, content={"error": err.message})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled exception on %s %s", request.method, request.url.path, exc_info=exc)
    return JSONResponse(status_code=500, content={"error": "Internal server error"})


def create_app() -> FastAPI:
    app = FastAPI(title="Quiz API", lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=config.CORS_ORIGINS,  # "*" by default, the SPA is served elsewhere
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(QuizAppError, quiz_app_error_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    @app.api_route("/health", methods=["GET", "POST"])
    async def health():
        return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}

    app.include_router(auth.router, prefix="/api")
    app.include_router(quiz_sets.router, prefix="/api")
    app.include_router(questions.router, prefix="/api")
    app.include_router(feedback.router, prefix="/api")
    return app


app = create_app()


def run():
    logging.basicConfig(
        level=config.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info("Backend listening on http://%s:%s", config.HOST, config.PORT)
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
