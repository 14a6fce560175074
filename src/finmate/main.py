import os

import uvicorn

from finmate.app import create_app
from finmate.core.settings import get_env_int
from finmate.logger import get_logging_config

app = create_app()


def run() -> None:
    uvicorn.run(
        "finmate.main:app",
        host=os.getenv("HOST", "0.0.0.0"),
        port=get_env_int("PORT", 8000, min_value=1),
        log_config=get_logging_config(),
    )


if __name__ == "__main__":
    run()
