"""Run the API with uvicorn: ``python -m app``."""

import uvicorn

from app.core.config import get_settings
from app.core.logging_setup import configure_logging


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level.upper())
    uvicorn.run("app.main:create_app", factory=True, host=settings.host, port=settings.port, log_config=None)


if __name__ == "__main__":
    main()
