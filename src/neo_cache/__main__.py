"""Run the cache API with uvicorn."""

import uvicorn

from .api.app import create_app
from .config.settings import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(create_app(settings=settings), host=settings.host, port=settings.port)


if __name__ == "__main__":
    main()
