# noticeboard/__main__.py
"""
Process entry point: python -m noticeboard
"""
import asyncio
import logging.config

from uvicorn.config import LOGGING_CONFIG

from noticeboard.config import settings
from noticeboard.core.bootstrap import Bootstrap


def main() -> None:
    # Same handlers/format as uvicorn so bootstrap lines match the server's
    logging.config.dictConfig(LOGGING_CONFIG)
    asyncio.run(Bootstrap(settings).run())


if __name__ == "__main__":
    main()
