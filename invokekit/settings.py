from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from invokekit.config_io import load_config
from invokekit.config_namespace import ConfigNamespace

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")
LOG_FORMAT = "%(asctime)s | %(levelname)s | %(message)s"
PACKAGE_LOGGER = "invokekit"
INVOKER_LOGGER = "invokekit.invoker"


@dataclass(frozen=True)
class InvokerSettings:
    """Logging settings read from the `invokekit:` config section.

    These only shape what gets logged; guard semantics never depend on them.
    """

    log_level: str = "WARNING"
    log_file: str | None = None
    trace_skips: bool = False

    @staticmethod
    def from_dict(cfg: Mapping[str, Any]) -> "InvokerSettings":
        """
        Parse the `invokekit` section of a loaded config mapping.

        Other top-level sections are left alone. A missing section yields defaults.

        Raises:
            TypeError / ValueError: on wrongly typed values or unknown keys.
        """

        if not isinstance(cfg, Mapping):
            raise ValueError("Config must be a mapping")

        section = ConfigNamespace(cfg, path="").namespace("invokekit", optional=True)
        log_level = section.get_str("log_level", default="WARNING", choices=LOG_LEVELS)
        log_file = section.get_str("log_file", default=None)
        trace_skips = section.get_bool("trace_skips", default=False)
        section.assert_consumed()

        if log_file is not None:
            log_file = os.path.expanduser(log_file)

        return InvokerSettings(
            log_level=str(log_level),
            log_file=log_file,
            trace_skips=trace_skips,
        )


def load_settings(**kwargs: Any) -> InvokerSettings:
    """Load the config file (see `load_config` for keyword arguments) and parse settings."""

    cfg, source = load_config(**kwargs)
    settings = InvokerSettings.from_dict(cfg)
    logging.getLogger(PACKAGE_LOGGER).debug("Loaded config from %s", source.describe())
    return settings


def configure_logging(settings: InvokerSettings) -> logging.Logger:
    """
    Configure the `invokekit` package logger from settings.

    Logs go to stderr and, when `log_file` is set, to a UTF-8 file. Calling this again
    replaces the handlers installed by the previous call.
    """

    level = getattr(logging, settings.log_level)
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    formatter = logging.Formatter(LOG_FORMAT)

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if settings.log_file:
        log_dir = os.path.dirname(os.path.abspath(settings.log_file))
        os.makedirs(log_dir, exist_ok=True)
        file_handler = logging.FileHandler(settings.log_file, encoding="utf-8")
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.propagate = False

    invoker_logger = logging.getLogger(INVOKER_LOGGER)
    invoker_logger.setLevel(logging.DEBUG if settings.trace_skips else logging.NOTSET)

    package_logger.debug("invokekit logging configured (level=%s)", settings.log_level)
    return package_logger
