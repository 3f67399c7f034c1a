"""
Workspace configuration.

Settings come from defaults, a YAML settings file, or environment
variables:

```yaml
workspace:
  id: "workspace-1"
  name: "Kelas REY"
  default_page_title: "Untitled"
  default_code_language: "javascript"
  recursive_toggle_delete: false
```
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

ENV_PREFIX = "WORKSPACE_DOCS_"

# YAML keys that differ from the dataclass field names
_YAML_ALIASES = {"id": "workspace_id", "name": "workspace_name"}


@dataclass
class WorkspaceConfig:
    """Configuration for a workspace instance."""

    workspace_id: str = "workspace-1"
    workspace_name: str = "My Workspace"
    default_page_title: str = "Untitled"
    default_page_icon: str = "📄"
    default_code_language: str = "javascript"
    trigger_character: str = "/"
    # Deleting a toggle removes only its direct children unless enabled
    recursive_toggle_delete: bool = False
    log_level: str = "INFO"
    json_logs: bool = False

    def __post_init__(self) -> None:
        if len(self.trigger_character) != 1:
            raise ValueError("trigger_character must be exactly one character")

    @classmethod
    def from_env(cls) -> WorkspaceConfig:
        """Create config from environment variables.

        Every field maps to WORKSPACE_DOCS_<FIELD>, e.g.
        WORKSPACE_DOCS_WORKSPACE_NAME or WORKSPACE_DOCS_RECURSIVE_TOGGLE_DELETE.
        """
        values: dict[str, Any] = {}
        for f in fields(cls):
            raw = os.environ.get(f"{ENV_PREFIX}{f.name.upper()}")
            if raw is not None:
                values[f.name] = raw
        return cls(**_coerce(values))

    @classmethod
    def from_yaml(cls, path: Path) -> WorkspaceConfig:
        """Create config from the workspace section of a YAML file.

        A missing file or unparsable YAML yields the defaults.
        """
        if not path.exists():
            return cls()

        try:
            data = yaml.safe_load(path.read_text()) or {}
        except yaml.YAMLError as e:
            logger.warning(f"Ignoring invalid workspace config {path}: {e}")
            return cls()

        section = data.get("workspace") or {}
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, value in section.items():
            name = _YAML_ALIASES.get(key, key)
            if name in known:
                values[name] = value
            else:
                logger.debug(f"Unknown workspace config key: {key}")
        return cls(**_coerce(values))

    def to_dict(self) -> dict[str, Any]:
        return {f.name: getattr(self, f.name) for f in fields(self)}


def _coerce(values: dict[str, Any]) -> dict[str, Any]:
    """Convert string booleans from env vars and YAML into bools."""
    for key in ("recursive_toggle_delete", "json_logs"):
        if isinstance(values.get(key), str):
            values[key] = values[key].strip().lower() in ("1", "true", "yes", "on")
    return values
