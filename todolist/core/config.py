from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from fastapi import Depends
from typing_extensions import Annotated


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    app_title: str = "To-Do List API"
    app_version: str = "1.0.0"
    database_url: str = "sqlite+aiosqlite:///./todolist.db"
    db_echo: bool = False
    db_pool_pre_ping: bool = True
    api_prefix: str = "/api"
    cors_origins: list[str] = ["https://localhost:64163"]
    log_level: str = "INFO"


@lru_cache
def get_settings() -> Settings:
    return Settings()


SettingsDep = Annotated[Settings, Depends(get_settings)]
