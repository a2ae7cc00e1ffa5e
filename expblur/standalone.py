"""Standalone FastAPI entry point for expblur.

Run:
    python -m expblur.standalone

Environment variables:
    EXPBLUR_HOST: Interface to bind (default: 0.0.0.0)
    EXPBLUR_PORT: Port to run on (default: 8080)
    EXPBLUR_LOG_LEVEL: Logging level (default: INFO)
"""
import logging

from .api import create_api_app
from .config import settings

# Create the app instance for uvicorn
app = create_api_app()


def main():
    """Run the standalone server."""
    import uvicorn

    logging.basicConfig(level=settings.LOG_LEVEL.upper())
    uvicorn.run(
        "expblur.standalone:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    main()
