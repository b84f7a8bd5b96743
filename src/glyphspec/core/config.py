"""Configuration model shared by the pipeline and the CLI.

GlyphSpecConfig

`font_count` (`int`)
: Number of bitmap fonts the build targets. Font indices in every input
  document must satisfy ``0 <= index < font_count``.

`max_path_length` (`int`)
: Longest accepted ``TrueTypeLib`` value, in characters. Longer paths are
  rejected instead of being truncated.

`max_record_length` (`int`)
: Longest accepted glyph specification record, in encoded bytes including the
  trailing newline.

A configuration file is a YAML mapping holding these keys, either at the top
level or nested under a ``glyphspec`` key:

```yaml
glyphspec:
  font_count: 4
  max_path_length: 1024
```
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationError
import yaml

from .exceptions import ConfigError


CONFIG_ENV_VAR = "GLYPHSPEC_CONFIG"
DEFAULT_FONT_COUNT = 3


class GlyphSpecConfig(BaseModel):
    """Settings driving font usage resolution and spec emission."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    font_count: int = Field(default=DEFAULT_FONT_COUNT, ge=1)
    max_path_length: int = Field(default=4096, ge=1)
    max_record_length: int = Field(default=4352, ge=16)


def _extract_section(payload: Any) -> dict[str, Any]:
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ConfigError("Configuration root must be a mapping.")
    section = payload.get("glyphspec", payload)
    if section is None:
        return {}
    if not isinstance(section, dict):
        raise ConfigError("The 'glyphspec' section must be a mapping.")
    return section


def load_config(path: Path | None = None, **overrides: Any) -> GlyphSpecConfig:
    """Load configuration from ``path`` (or ``$GLYPHSPEC_CONFIG``) and apply overrides.

    Overrides set to ``None`` are ignored so CLI options can be forwarded as-is.
    """
    if path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        if env_path:
            path = Path(env_path).expanduser()

    data: dict[str, Any] = {}
    if path is not None:
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as exc:
            raise ConfigError(f"Unable to read configuration file '{path}'.") from exc
        try:
            payload = yaml.safe_load(raw)
        except yaml.YAMLError as exc:
            raise ConfigError(f"Invalid YAML in configuration file '{path}'.") from exc
        data.update(_extract_section(payload))

    data.update({key: value for key, value in overrides.items() if value is not None})

    try:
        return GlyphSpecConfig.model_validate(data)
    except ValidationError as exc:
        source = f" '{path}'" if path is not None else ""
        raise ConfigError(f"Invalid configuration{source}: {exc}") from exc


__all__ = ["CONFIG_ENV_VAR", "DEFAULT_FONT_COUNT", "GlyphSpecConfig", "load_config"]
