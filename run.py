"""
Run the API server (host/port from settings, default 0.0.0.0:3005).
Usage: python3 run.py   (from the project root)
"""
import uvicorn

from config import settings

if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
