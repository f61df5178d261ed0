"""Create the elevator state tables for the configured database."""

import logging

from core.config import ServiceConfig
from db.models import metadata
from db.session import create_engine_from_config

logger = logging.getLogger(__name__)


def init_db(config: ServiceConfig) -> None:
    """Create every table declared in ``db.models`` if missing."""
    engine = create_engine_from_config(config)
    try:
        metadata.create_all(bind=engine)
    finally:
        engine.dispose()
    logger.info("DB schema created at %s", engine.url.render_as_string(hide_password=True))


if __name__ == "__main__":
    cfg = ServiceConfig.from_env()
    cfg.configure_logging()
    init_db(cfg)
