"""Best-effort removal of previous build artifacts."""

from __future__ import annotations

from pathlib import Path
from typing import List

from .logging import get_logger

logger = get_logger("cleanup")


def delete_if_exists(path: Path) -> bool:
    """Delete ``path``; report whether a file was removed. Never raises."""
    try:
        path.unlink()
    except FileNotFoundError:
        return False
    except OSError as exc:
        logger.debug("Could not remove %s: %s", path, exc)
        return False
    return True


def clean_outputs(output: Path) -> List[Path]:
    """Remove the bundle at ``output`` and its ``.map`` sibling."""
    removed: List[Path] = []
    for candidate in (output, output.with_name(output.name + ".map")):
        if delete_if_exists(candidate):
            removed.append(candidate)
    return removed


__all__ = ["clean_outputs", "delete_if_exists"]
