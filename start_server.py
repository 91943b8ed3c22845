# start_server.py
# Run the expense backend with uvicorn

import logging

import uvicorn

from expense_backend.config import get_settings

logger = logging.getLogger(__name__)


def main():
    settings = get_settings()

    # Configure logging
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    logger.info("Starting expense backend on http://%s:%s", settings.host, settings.port)
    logger.info("Visit http://localhost:%s/init to initialize the database", settings.port)

    uvicorn.run(
        "expense_backend.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
