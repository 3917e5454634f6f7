"""
Compiler options and their environment overrides.

    VISUALENCER_WRAP              "0"/"false"/"no"/"off" disables the
                                  `const seq = new Sequence();` / `seq.play();` wrapper
    VISUALENCER_SEPARATE_ENTRIES  blank line between chains and statements
    VISUALENCER_LOG_LEVEL         logging level name for the CLI and server

A `.env` file is read first (python-dotenv); variables already present in
the process environment take precedence over it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional, Union

from dotenv import find_dotenv, load_dotenv


logger = logging.getLogger(__name__)

_FALSE = {"0", "false", "no", "off"}
_TRUE = {"1", "true", "yes", "on"}


@dataclass
class CompilerOptions:
    wrap: bool = True
    separate_entries: bool = True
    log_level: str = "WARNING"


def _env_flag(env: Mapping[str, str], key: str, default: bool) -> bool:
    raw = env.get(key)
    if raw is None or not raw.strip():
        return default
    value = raw.strip().lower()
    if value in _FALSE:
        return False
    if value in _TRUE:
        return True
    logger.warning(f"Ignoring {key}={raw!r}: expected one of {sorted(_TRUE | _FALSE)}")
    return default


def load_options(env_file: Optional[Union[str, os.PathLike]] = None,
                 environ: Optional[Mapping[str, str]] = None) -> CompilerOptions:
    """Build CompilerOptions from a .env file and the environment."""
    if environ is None:
        load_dotenv(env_file or find_dotenv(usecwd=True), override=False)
        environ = os.environ

    defaults = CompilerOptions()
    return CompilerOptions(
        wrap=_env_flag(environ, "VISUALENCER_WRAP", defaults.wrap),
        separate_entries=_env_flag(environ, "VISUALENCER_SEPARATE_ENTRIES", defaults.separate_entries),
        log_level=(environ.get("VISUALENCER_LOG_LEVEL") or defaults.log_level).strip().upper(),
    )
