"""Run the API server until externally terminated: python -m dziennik."""

import uvicorn

from dziennik.config import get_settings


def main() -> None:
    settings = get_settings()
    uvicorn.run(
        "dziennik.main:app",
        host=settings.host,
        port=settings.port,
        log_config=None,
    )


if __name__ == "__main__":
    main()
