"""Simple script to run the FastAPI application."""

import uvicorn

from calcufy.utils.config import settings

if __name__ == "__main__":
    print(f"Starting server on {settings.host}:{settings.port}", flush=True)

    uvicorn.run(
        "calcufy.api.main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
        access_log=True,
    )
