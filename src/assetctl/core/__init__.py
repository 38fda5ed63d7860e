"""Assetctl core package."""
from .context import RunContext
from .errors import ScriptError
from .runtime.clock import utc_now, utc_now_iso
from .runtime.logging import log_event
from .runtime.serialize import dumps_json

__all__ = [
    "RunContext",
    "ScriptError",
    "utc_now",
    "utc_now_iso",
    "dumps_json",
    "log_event",
]
