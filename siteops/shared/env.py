"""Environment utilities for resolving Docker-style secret files."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import List, MutableMapping, Optional

logger = logging.getLogger(__name__)


def load_secret_file_variables(
    environ: Optional[MutableMapping[str, str]] = None,
) -> List[str]:
    """
    Expose ``KEY_FILE`` secrets as ``KEY`` variables.

    Deployments mount ``NEXTAUTH_SECRET_FILE``, ``GOOGLE_CLIENT_SECRET_FILE`` and
    friends; the settings layer and the environment health probe only look
    at ``NEXTAUTH_SECRET`` and ``GOOGLE_CLIENT_SECRET``. Values already present
    win over the file. Failures are logged and never raised.

    Returns:
        Names of the variables populated from files.
    """
    env = os.environ if environ is None else environ
    resolved: List[str] = []

    for key, file_path in list(env.items()):
        if not key.endswith("_FILE") or not file_path:
            continue
        target_key = key[: -len("_FILE")]
        if env.get(target_key):
            continue
        try:
            env[target_key] = Path(file_path).read_text(encoding="utf-8").strip()
            resolved.append(target_key)
        except FileNotFoundError as exc:
            logger.warning(
                "secrets.file.missing",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
        except UnicodeDecodeError as exc:
            logger.warning(
                "secrets.file.decode_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )
        except OSError as exc:
            logger.warning(
                "secrets.file.load_failed",
                extra={"key": key, "path": file_path, "error": str(exc)},
            )

    return resolved


load_secret_file_variables()
