"""
Run the NoteTime backend under uvicorn.

Usage:
    python -m notetime            # HOST/PORT from the environment, default 0.0.0.0:8080
"""

import uvicorn

from notetime.config import settings


def main() -> None:
    uvicorn.run(
        "notetime.main:app",
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    main()
