import logging
from pathlib import Path

from alembic import command
from alembic.config import Config

from todolist.core.config import get_settings

logger = logging.getLogger(__name__)

# Shipped as package data alongside this module
SCRIPT_LOCATION = Path(__file__).resolve().parent / "alembic"


def alembic_config(database_url: str | None = None) -> Config:
    """Build an alembic Config pointing at the project's migration scripts."""
    cfg = Config()
    cfg.set_main_option("script_location", str(SCRIPT_LOCATION))
    url = database_url or get_settings().database_url
    # configparser interpolation
    cfg.set_main_option("sqlalchemy.url", url.replace("%", "%%"))
    return cfg


def upgrade_database(database_url: str | None = None, revision: str = "head") -> None:
    """
    Bring the schema up to `revision`.

    Must run before the API accepts traffic; the app never creates tables
    on its own. Calls asyncio.run internally, so do not call it from inside
    a running event loop.
    """
    cfg = alembic_config(database_url)
    logger.info("Applying migrations up to %s", revision)
    command.upgrade(cfg, revision)
