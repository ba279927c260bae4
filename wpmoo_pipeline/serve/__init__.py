"""Development server, live-reload channel and rebuild scheduling."""

from .channel import FULL_RELOAD, LiveReloadChannel
from .gate import RebuildGate

__all__ = ["FULL_RELOAD", "LiveReloadChannel", "RebuildGate"]
