"""Backing key/value sources for EnvUtils."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict, Mapping, Optional, Union

from dotenv import dotenv_values

logger = logging.getLogger(__name__)


def process_env() -> Mapping[str, str]:
    return os.environ


def load_env_file(
    path: Optional[Union[Path, str]] = None,
    *,
    include_os_environ: bool = True,
    overrides: Optional[Mapping[str, str]] = None,
) -> Dict[str, str]:
    """Build a source dict from a .env file.

    Precedence (low -> high): .env file, OS env vars, overrides.
    A missing file contributes nothing. Keys declared without a value
    in the file are left out, so they read as absent.
    """
    env_path = Path(path) if path else Path.cwd() / '.env'
    if not env_path.exists():
        logger.debug(f"No env file at {env_path}")
        data: Dict[str, str] = {}
    else:
        data = {k: v for k, v in dotenv_values(env_path).items() if v is not None}
        logger.debug(f"Loaded {len(data)} values from {env_path}")

    if include_os_environ:
        data.update(os.environ)
    for key, val in (overrides or {}).items():
        data[key] = str(val)
    return data


__all__ = ["process_env", "load_env_file"]
