from contextlib import asynccontextmanager

from fastapi import APIRouter, FastAPI

from linkauth.auth.router import router as auth_router
from linkauth.core.cors import add_cors_middleware
from linkauth.core.exception_handlers import register_exception_handlers
from linkauth.core.firebase import init_firebase
from linkauth.core.http import close_identity_toolkit_client
from linkauth.core.logging import configure_logging
from linkauth.core.request_logging import add_request_logging_middleware
from linkauth.core.settings import get_settings
from linkauth.health.router import router as health_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    if get_settings().firebase_admin_enabled:
        init_firebase()
    yield
    await close_identity_toolkit_client()


app = FastAPI(title="LinkAuth", version="0.1.0", lifespan=lifespan)

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(auth_router)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)
