"""Centralized dependency type aliases for FastAPI routes."""

from typing import Annotated

from fastapi import Depends

from linkauth.core.settings import Settings, get_settings

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]
