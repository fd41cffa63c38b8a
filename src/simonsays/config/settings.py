"""Load game settings from a JSON file and ``SIMONSAYS_*`` environment variables."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import orjson
import structlog

from ..core.ranges import ConfigurationError
from ..core.schemas import GameSettings, validate_settings

LOGGER = structlog.get_logger(__name__)

DEFAULT_CONFIG_PATH = Path("config/simonsays.json")

ENV_MIN = "SIMONSAYS_MIN"
ENV_MAX = "SIMONSAYS_MAX"
ENV_PACING = "SIMONSAYS_PACING_MS"
ENV_SEED = "SIMONSAYS_SEED"


def load_settings(
    path: Path = DEFAULT_CONFIG_PATH,
    *,
    environ: Optional[Mapping[str, str]] = None,
    **overrides: Any,
) -> GameSettings:
    """Load settings from disk, then environment, then explicit overrides.

    A missing file means defaults. Overrides whose value is ``None`` are
    ignored so CLI options can be passed through unconditionally.
    """

    data: Dict[str, Any] = {}
    if path.exists():
        try:
            data = orjson.loads(path.read_bytes())
        except orjson.JSONDecodeError as exc:
            raise ConfigurationError(f"Config file {path} is not valid JSON: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {path} must contain a JSON object")

    number_range = dict(data.get("number_range") or {})
    env = os.environ if environ is None else environ

    if ENV_MIN in env:
        number_range["min"] = _env_int(env, ENV_MIN)
    if ENV_MAX in env:
        number_range["max"] = _env_int(env, ENV_MAX)
    if ENV_PACING in env:
        data["pacing_interval"] = _env_int(env, ENV_PACING)
    if ENV_SEED in env:
        data["seed"] = _env_int(env, ENV_SEED)

    for key in ("min", "max"):
        if overrides.get(key) is not None:
            number_range[key] = overrides[key]
    for key in ("pacing_interval", "seed"):
        if overrides.get(key) is not None:
            data[key] = overrides[key]

    if number_range:
        data["number_range"] = {**_default_range(), **number_range}

    settings = validate_settings(data)
    LOGGER.debug(
        "config.loaded",
        path=str(path),
        number_range=(settings.number_range.min, settings.number_range.max),
        pacing_interval=settings.pacing_interval,
        seed=settings.seed,
    )
    return settings


def _default_range() -> Dict[str, int]:
    default = GameSettings().number_range
    return {"min": default.min, "max": default.max}


def _env_int(env: Mapping[str, str], name: str) -> int:
    raw = env[name]
    try:
        return int(raw)
    except (TypeError, ValueError) as exc:
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}") from exc
