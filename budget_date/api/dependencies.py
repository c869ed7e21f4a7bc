from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import FastAPI

from budget_date.api.tool_service import ToolBundle
from budget_date.core.config import ApiSettings


@lru_cache(maxsize=1)
def get_settings() -> ApiSettings:
    return ApiSettings.from_env()


@lru_cache(maxsize=1)
def get_tool_bundle() -> ToolBundle:
    return ToolBundle(get_settings())


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    try:
        yield
    finally:
        if get_tool_bundle.cache_info().currsize:
            bundle = get_tool_bundle()
            await bundle.close()
            get_tool_bundle.cache_clear()
