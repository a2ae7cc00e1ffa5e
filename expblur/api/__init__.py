"""REST API for expblur."""

from fastapi import FastAPI

from expblur import __version__

from .filters import router as filters_router


def create_api_app() -> FastAPI:
    """Create the FastAPI application serving the filter endpoints."""
    app = FastAPI(title="expblur", version=__version__)
    app.include_router(filters_router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {"status": "ok", "version": __version__}

    return app


__all__ = ['create_api_app']
