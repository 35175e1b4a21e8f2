from __future__ import annotations

import logging
import os
from pathlib import Path


logger = logging.getLogger("chat-relay.env")


def load_local_env(env_path: Path | str = Path(".env")) -> int:
    """Load key=value pairs from a local .env file into os.environ.

    Variables already set in the process environment win over the file.
    Returns the number of variables that were applied.
    """
    path = Path(env_path)
    if not path.is_file():
        return 0

    applied = 0
    for line_number, raw_line in enumerate(path.read_text().splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        if line.startswith("export "):
            line = line[len("export "):].lstrip()
        if "=" not in line:
            logger.warning("Skipping malformed .env line %d in %s", line_number, path)
            continue

        key, value = line.split("=", 1)
        clean_key = key.strip()
        if not clean_key:
            logger.warning("Skipping .env line %d with empty key in %s", line_number, path)
            continue
        if clean_key in os.environ:
            continue
        os.environ[clean_key] = value.strip().strip('"').strip("'")
        applied += 1

    logger.debug("Loaded %d variable(s) from %s", applied, path)
    return applied
