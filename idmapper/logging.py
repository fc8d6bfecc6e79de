import inspect
import logging
from collections.abc import Set
from pprint import pformat
from typing import Any, Optional

from pydantic import BaseModel

from idschema.xref import Xref
from idmapper.config import IDMapperConfig

PACKAGE_LOGGER = "idmapper"

LOG_FORMAT = "%(asctime)s - %(name)s - %(pathname)s:%(lineno)d - %(levelname)s - %(message)s"


def _render(value: Any) -> Any:
    """Replace identifiers and namespaces with compact, stable forms for pformat."""
    if isinstance(value, Xref):
        return str(value)
    if isinstance(value, BaseModel):
        return value.model_dump(mode="json")
    if isinstance(value, Set):
        rendered = [_render(item) for item in value]
        return sorted(rendered, key=str)
    if isinstance(value, (list, tuple)):
        return [_render(item) for item in value]
    if isinstance(value, dict):
        return {str(_render(key)): _render(item) for key, item in value.items()}
    return value


class PprintLogger:
    """A logger wrapper that pretty-prints structured log messages.

    Messages are usually dicts such as ``{"message": ..., "mapper": ...}``.
    Xrefs are shown as ``code:id``, sets of Xrefs as sorted lists, and a
    bare pydantic model as its JSON dump.
    """

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        if not pprint:
            return str(msg)
        if isinstance(msg, str):
            return msg
        if isinstance(msg, BaseModel) and not isinstance(msg, Xref):
            return msg.model_dump_json(indent=2)
        return pformat(_render(msg), width=120, depth=None)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        if self._logger.isEnabledFor(logging.DEBUG):
            self._logger.debug(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.info(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.warning(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.error(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        self._logger.exception(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate any other attributes to the underlying logger."""
        return getattr(self._logger, name)


def setup_logging(name: Optional[str] = None, level: int | str | None = None) -> PprintLogger:
    """Return a PprintLogger for ``name``, attaching a stream handler once.

    When ``name`` is omitted the caller's module name is used. ``level`` is
    only applied when given, so a level set by the application is kept.
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        name = frame.f_globals.get("__name__", "idmapper")  # type: ignore[union-attr]
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return PprintLogger(logger)


def configure_logging(config: Optional[IDMapperConfig] = None) -> PprintLogger:
    """Apply ``config.log_level`` to the package logger and return it.

    Module loggers created by ``setup_logging`` keep level NOTSET, so they
    inherit this level. Without ``config`` the settings are read from the
    environment (IDMAPPER_LOG_LEVEL).
    """
    config = config or IDMapperConfig.from_env()
    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(config.log_level)
    return PprintLogger(logger)
