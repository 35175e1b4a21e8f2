from __future__ import annotations

import logging
import sys
from pathlib import Path


PROJECT_ROOT = Path(__file__).resolve().parent
API_CODE_PATH = PROJECT_ROOT / "api-code"
if str(API_CODE_PATH) not in sys.path:
    sys.path.insert(0, str(API_CODE_PATH))

from env_loader import load_local_env  # noqa: E402
from relay_app import create_app  # noqa: E402
from settings import get_settings  # noqa: E402


load_local_env()
settings = get_settings()

logging.basicConfig(level=settings.log_level.upper())

app = create_app(settings)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("app_main:app", host=settings.relay_host, port=settings.relay_port)
