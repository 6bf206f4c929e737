"""Environment store access and .env file merging."""

from __future__ import annotations

import os
from collections.abc import MutableMapping
from pathlib import Path

from dotenv import dotenv_values, find_dotenv
from loguru import logger

Environ = MutableMapping[str, str]


def get_environ(environ: Environ | None = None) -> Environ:
    """Return the given store, or the process environment."""
    return os.environ if environ is None else environ


def lookup(environ: Environ, name: str, prefix: str = "") -> tuple[str, str | None]:
    """Resolve prefix + name, falling back to the bare name.

    Returns (resolved name, value); value is None when neither is set.
    """
    if prefix and prefix + name in environ:
        name = prefix + name
    return name, environ.get(name)


def load_env_file(path: str | Path | None = None, environ: Environ | None = None) -> int:
    """Merge KEY=VALUE entries from a .env file into the store.

    Without a path, the nearest .env from the working directory upwards is
    used. Variables already set are left alone. Returns the number of entries
    added.
    """
    environ = get_environ(environ)
    if path is None:
        found = find_dotenv(usecwd=True)
        if not found:
            return 0
        path = found
    path = Path(path)
    if not path.is_file():
        logger.warning("Env file not found: {}", path)
        return 0

    added = 0
    for key, value in dotenv_values(path).items():
        # KEY with no "=" parses to None
        if value is None or key in environ:
            continue
        environ[key] = value
        added += 1
    logger.debug("Loaded {} variables from {}", added, path)
    return added
