import logging
import pathlib
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from fastapi.staticfiles import StaticFiles
from sqlalchemy.exc import SQLAlchemyError
from starlette.middleware.cors import CORSMiddleware

from tcg_backend.db import create_tables
from tcg_backend.load_secrets import app_env, port
from tcg_backend.models.schema_models import HealthSchema
from tcg_backend.routers import auth, cards, decks

PUBLIC_DIR = pathlib.Path(__file__).parents[1] / "public"

logging.basicConfig(level=logging.DEBUG if app_env == "development" else logging.INFO)
logging.getLogger("aiosqlite").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app):
    """Create the tables before the first request is served."""
    await create_tables()
    logging.info(f"Server is running on http://localhost:{port}")
    logging.info(f"Swagger docs at http://localhost:{port}/api-docs")
    try:
        yield
    finally:
        logging.info("Stop Server")


app = FastAPI(
    title="TCG API Documentation",
    lifespan=lifespan,
    docs_url="/api-docs",
    swagger_ui_parameters={"defaultModelsExpandDepth": -1},
)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed bodies and path parameters are client errors (400), not 422"""
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_encoder(exc.errors())},
    )


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logging.error(f"Database error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": "Internal server error"},
    )


@app.get("/", response_class=PlainTextResponse)
async def welcome():
    return "Welcome to the TCG Backend server"


@app.get("/api/health", response_model=HealthSchema)
async def health():
    return HealthSchema(status="ok", message="TCG Backend Server is running")


app.include_router(auth.auth_router)
app.include_router(cards.cards_router)
app.include_router(decks.decks_router)

# Mounted last so that the API routes above take precedence
if PUBLIC_DIR.is_dir():
    app.mount("/", StaticFiles(directory=PUBLIC_DIR, html=True), name="public")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("tcg_backend.main:app", host="0.0.0.0", port=port)
