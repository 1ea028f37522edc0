from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from linkauth.core.settings import get_settings


def add_cors_middleware(app: FastAPI) -> None:
    settings = get_settings()

    # Sign-in responses carry tokens in the body, never in cookies.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=False,
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
    )
