from __future__ import annotations

import inspect
import logging
import os
import sys
from typing import Any, Optional

LOGGER_NAME = "bos_wagon"


class Logger:
    """Tagged logging facade.

    Every message is prefixed with ``[Tag]``, the calling class name or the
    CamelCased module name, and handed to the standard ``bos_wagon`` logger.
    """

    def __init__(self, name: str = LOGGER_NAME):
        self._logger = logging.getLogger(name)

    @staticmethod
    def _snake_to_camel(name: str) -> str:
        parts = [p for p in name.replace("-", "_").split("_") if p]
        if not parts:
            return name or "Log"
        return "".join(p[:1].upper() + p[1:] for p in parts)

    def _resolve_tag(self, *, stacklevel: int) -> str:
        frame = inspect.currentframe()
        for _ in range(stacklevel):
            if frame is None:
                return "Log"
            frame = frame.f_back
        if frame is None:
            return "Log"

        owner = frame.f_locals.get("self")
        if owner is not None:
            return owner.__class__.__name__

        owner = frame.f_locals.get("cls")
        if isinstance(owner, type):
            return owner.__name__

        file_path = frame.f_globals.get("__file__") or frame.f_code.co_filename
        if file_path:
            base = os.path.splitext(os.path.basename(file_path))[0]
            if base and base != "__init__":
                return self._snake_to_camel(base)

        module_name = frame.f_globals.get("__name__")
        if module_name and module_name not in ("__main__", "builtins"):
            return self._snake_to_camel(module_name.rsplit(".", 1)[-1])
        return "Log"

    def _emit(
        self,
        level: int,
        message: str,
        *,
        tag: Optional[str] = None,
        exc_info: Any = None,
    ) -> None:
        if not self._logger.isEnabledFor(level):
            return
        # _emit <- public method <- caller
        resolved_tag = tag or self._resolve_tag(stacklevel=3)
        self._logger.log(level, f"[{resolved_tag}] {message}", exc_info=exc_info)

    def debug(self, message: str, *, tag: Optional[str] = None) -> None:
        self._emit(logging.DEBUG, message, tag=tag)

    def info(self, message: str, *, tag: Optional[str] = None) -> None:
        self._emit(logging.INFO, message, tag=tag)

    def warning(self, message: str, *, tag: Optional[str] = None, exc_info: Any = None) -> None:
        self._emit(logging.WARNING, message, tag=tag, exc_info=exc_info)

    def error(self, message: str, *, tag: Optional[str] = None, exc_info: Any = None) -> None:
        self._emit(logging.ERROR, message, tag=tag, exc_info=exc_info)

    def kv(self, key: str, value: Any, *, key_width: int = 14, tag: Optional[str] = None) -> None:
        self._emit(logging.INFO, f"{str(key):{int(key_width)}s} {value}", tag=tag)


def setup_logging(level: int = logging.INFO, stream=None) -> logging.Logger:
    """Attach a plain stdout handler to the ``bos_wagon`` logger.

    Library code never calls this; it is meant for the command-line entry
    point. Calling it twice replaces the previous handler.
    """
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))

    root = logging.getLogger(LOGGER_NAME)
    root.setLevel(level)
    root.handlers = [handler]
    return root


logger = Logger()
