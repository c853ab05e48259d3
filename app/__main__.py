"""Run the API with uvicorn: ``python -m app``."""
from __future__ import annotations

import uvicorn

from app.core.settings import settings


def main() -> None:
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
        log_config=None,
    )


if __name__ == "__main__":
    main()
