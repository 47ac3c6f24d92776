import os

import uvicorn

from medtrack.core.config import settings

if __name__ == "__main__":
    # Disable reload in production
    reload = os.getenv("ENV") == "development"

    print(f"[STARTUP] Server binding to host={settings.HOST} port={settings.PORT}")
    uvicorn.run(
        "medtrack.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=reload,
        log_level=settings.LOG_LEVEL.lower(),
        workers=1,  # One process owns the state snapshot
        lifespan="auto"
    )
