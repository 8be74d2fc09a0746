"""Engine configuration loader with Pydantic v2 validation.

Loads and validates a ``permissions.yaml`` file into a typed
:class:`EngineConfig`.  Unknown keys are allowed so that newer config files
keep loading on older engines.

Example
-------
>>> loader = ConfigLoader()
>>> config = loader.load_string("schedule:\\n  on_malformed: deny\\n")
>>> config.schedule.on_malformed
'deny'
"""
from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field, field_validator


class ScheduleConfig(BaseModel):
    """Configuration of the access-schedule check."""

    model_config = {"extra": "allow"}

    on_malformed: Literal["allow", "deny"] = Field(default="allow")


class AuditConfig(BaseModel):
    """Configuration of the decision audit trail."""

    model_config = {"extra": "allow"}

    enabled: bool = Field(default=False)
    log_path: Path = Field(default=Path("./permission_audit.jsonl"))


class EngineConfig(BaseModel):
    """Top-level engine configuration schema.

    All sections are optional and fall back to defaults.

    Attributes
    ----------
    roles:
        Role code → path of that role's permission document.  Used by the
        CLI to resolve ``--role`` arguments.
    """

    model_config = {"extra": "allow"}

    version: str = Field(default="1")
    schedule: ScheduleConfig = Field(default_factory=ScheduleConfig)
    audit: AuditConfig = Field(default_factory=AuditConfig)
    roles: dict[str, Path] = Field(default_factory=dict)

    @field_validator("roles")
    @classmethod
    def normalise_role_codes(cls, value: dict[str, Path]) -> dict[str, Path]:
        return {code.strip().upper(): path for code, path in value.items()}

    def document_path(self, role_code: str) -> Path | None:
        """Return the document path configured for ``role_code``, if any."""
        return self.roles.get(role_code.strip().upper())


class ConfigLoader:
    """Loads and validates engine YAML configuration.

    Example
    -------
    >>> loader = ConfigLoader()
    >>> config = loader.load(Path("permissions.yaml"))
    """

    def load(self, config_path: Path) -> EngineConfig:
        """Load and validate an engine YAML file.

        Relative role document paths are resolved against the directory of
        the config file.

        Raises
        ------
        FileNotFoundError:
            When the config file does not exist.
        ValueError:
            When the YAML content fails Pydantic validation.
        """
        if not config_path.exists():
            raise FileNotFoundError(f"Engine config not found: {config_path}")

        with config_path.open("r", encoding="utf-8") as fh:
            raw: dict[str, object] = yaml.safe_load(fh) or {}

        config = EngineConfig.model_validate(raw)
        base_dir = config_path.parent
        resolved = {
            code: path if path.is_absolute() else base_dir / path
            for code, path in config.roles.items()
        }
        return config.model_copy(update={"roles": resolved})

    def load_string(self, yaml_content: str) -> EngineConfig:
        """Load and validate a YAML string directly."""
        raw: dict[str, object] = yaml.safe_load(yaml_content) or {}
        return EngineConfig.model_validate(raw)

    def defaults(self) -> EngineConfig:
        """Return a default configuration with all defaults applied."""
        return EngineConfig()
