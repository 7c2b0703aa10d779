"""StreamAI - FastAPI entrypoint."""
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from streamai.config import settings
from streamai.db import JsonStore
from streamai.api import auth, movies, profile, stream, users
from streamai.services.stream import StreamAuthorizationError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not settings.stream_signing_secret or not settings.stream_edge_base_url:
        logger.warning(
            "STREAM_SIGNING_SECRET / STREAM_EDGE_BASE_URL not set: internal content cannot be authorized"
        )
    yield


app = FastAPI(
    title=settings.app_name,
    description="Catalog, accounts and signed edge URLs for video delivery",
    version="0.1.0",
    lifespan=lifespan,
)
app.state.store = JsonStore(settings.data_file)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


@app.exception_handler(StreamAuthorizationError)
async def stream_authorization_exception_handler(request: Request, exc: StreamAuthorizationError):
    headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.detail}, headers=headers)


app.add_middleware(
    CORSMiddleware,
    allow_origins=[o.strip() for o in settings.cors_origins.split(",") if o.strip()],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(auth.router, prefix="/api/auth", tags=["Auth"])
app.include_router(users.router, prefix="/api/users", tags=["Users"])
app.include_router(profile.router, prefix="/api", tags=["Profile"])
app.include_router(movies.router, prefix="/api/movies", tags=["Movies"])
app.include_router(stream.router, prefix="/api/stream", tags=["Streaming"])


@app.get("/health")
def health():
    return {"status": "ok", "app": settings.app_name}
