"""
Main module entry point.

This allows running the API server as: python -m siteops.main
"""

import uvicorn

from .config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "siteops.main.app:create_app",
        factory=True,
        host=settings.site.host,
        port=settings.site.port,
        reload=settings.site.reload,
    )


if __name__ == "__main__":
    main()
