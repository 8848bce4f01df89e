"""ASGI entry point: ``uvicorn catalog.main:app``."""

import uvicorn

from catalog.api import create_app
from catalog.infrastructure.database import settings

app = create_app(settings)

if __name__ == "__main__":
    uvicorn.run("catalog.main:app", host="0.0.0.0", port=8080)
