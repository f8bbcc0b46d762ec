"""Initialise lib_log_rich from the ``[lib_log_rich]`` configuration section.

The transport core logs through the standard :mod:`logging` module under
``postal_client.*``; :func:`init_logging` attaches those loggers to the
lib_log_rich runtime so CLI runs get structured, colourised output.
"""

from __future__ import annotations

from typing import cast

import lib_log_rich.config
import lib_log_rich.runtime
from lib_layered_config import Config
from pydantic import BaseModel, ConfigDict

from postal_client import __init__conf__


class LoggingConfigModel(BaseModel):
    """The ``[lib_log_rich]`` section.

    Only ``service`` and ``environment`` are typed here; every other key is
    forwarded to ``RuntimeConfig`` untouched.

    Example:
        >>> LoggingConfigModel(environment="staging", console_level="DEBUG").model_dump()
        {'service': None, 'environment': 'staging', 'console_level': 'DEBUG'}
    """

    model_config = ConfigDict(extra="allow")

    service: str | None = None
    environment: str = "prod"


def _build_runtime_config(config: Config) -> lib_log_rich.runtime.RuntimeConfig:
    raw: object = config.get("lib_log_rich", default={})
    section = LoggingConfigModel.model_validate(cast("dict[str, object]", raw) if raw else {})
    passthrough = section.model_dump(exclude={"service", "environment"}, exclude_none=True)
    return lib_log_rich.runtime.RuntimeConfig(
        service=section.service or __init__conf__.name,
        environment=section.environment,
        **passthrough,
    )


def init_logging(config: Config) -> None:
    """Start the lib_log_rich runtime once per process.

    ``.env`` files are loaded first so ``LOG_*`` variables take effect.
    Later calls return immediately.

    Example:
        >>> init_logging(Config({"lib_log_rich": {"environment": "test"}}, {}))  # doctest: +SKIP
    """
    if lib_log_rich.runtime.is_initialised():
        return
    lib_log_rich.config.enable_dotenv()
    lib_log_rich.runtime.init(_build_runtime_config(config))
    lib_log_rich.runtime.attach_std_logging()


__all__ = ["LoggingConfigModel", "init_logging"]
