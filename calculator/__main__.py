"""Run the calculator service with uvicorn."""

import uvicorn

from calculator.config import get_settings


def run() -> None:
    settings = get_settings()
    # uvicorn handles SIGINT/SIGTERM and runs the app's lifespan shutdown
    uvicorn.run(
        "calculator.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_config=None,
    )


if __name__ == "__main__":
    run()
