"""Entry point for running the API with ``python -m zyscope``."""

import uvicorn

from zyscope.config import get_settings


def main() -> None:
    """Serve the FastAPI application."""
    settings = get_settings()
    uvicorn.run(
        "zyscope.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
