"""cmdcenter Configuration.

Includes:
- AppConfig: Application settings with environment variable support
- The "currently open" project context handed to the command parser

Environment Variables:
    CMDCENTER_PROJECT_PATH: Directory holding .cmdcenter/config.yaml
    CMDCENTER_PROJECT_ID: Open project identifier
    CMDCENTER_PROJECT_TYPE: Open project type (e.g. basement_finish)
    CMDCENTER_MAX_INPUT_LENGTH: Maximum command length evaluated
    CMDCENTER_OUTPUT_FORMAT: "table" or "json"
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

from .core.commands import MAX_INPUT_LENGTH, CommandContext

logger = logging.getLogger(__name__)

CONFIG_DIR = ".cmdcenter"
CONFIG_FILE = "config.yaml"


class AppConfig(BaseSettings):
    """Application configuration with environment variable support.

    Configuration is loaded from environment variables with CMDCENTER_ prefix.
    For example, CMDCENTER_PROJECT_ID sets project_id.

    Values saved in .cmdcenter/config.yaml (by `cmdcenter open`) are applied
    on top of environment variables and defaults by load().
    """

    model_config = SettingsConfigDict(
        env_prefix="CMDCENTER_",
        extra="ignore",
    )

    project_path: Path = Field(default_factory=Path.cwd)

    # Open project context
    project_id: Optional[str] = None
    project_type: Optional[str] = None

    max_input_length: int = Field(default=MAX_INPUT_LENGTH, gt=0)
    output_format: Literal["table", "json"] = "table"

    @property
    def config_file(self) -> Path:
        return self.project_path / CONFIG_DIR / CONFIG_FILE

    def context(self) -> CommandContext:
        """Build the parser context for the open project."""
        return CommandContext(project_id=self.project_id, project_type=self.project_type)

    def has_open_project(self) -> bool:
        """Check if a project is currently open."""
        return self.project_id is not None

    @classmethod
    def load(cls, path: Path) -> "AppConfig":
        """Load configuration from .cmdcenter/config.yaml if it exists.

        Args:
            path: Project path to load configuration for

        Returns:
            AppConfig with saved values applied (or defaults if no config exists)
        """
        from ruamel.yaml import YAML
        from ruamel.yaml.error import YAMLError

        config = cls(project_path=path)
        config_file = config.config_file

        if config_file.exists():
            yaml = YAML()
            try:
                with config_file.open() as f:
                    data = yaml.load(f)
            except YAMLError as e:
                logger.warning(f"Ignoring unreadable config {config_file}: {e}")
                return config

            if data is None:
                return config
            if not isinstance(data, dict):
                logger.warning(f"Ignoring config {config_file}: expected a mapping")
                return config

            context = data.get("context")
            if isinstance(context, dict):
                config.project_id = context.get("project_id")
                config.project_type = context.get("project_type")
            elif context is not None:
                logger.warning(f"Ignoring 'context' in {config_file}: expected a mapping")

            if data.get("output_format") in ("table", "json"):
                config.output_format = data["output_format"]

        return config

    def save(self) -> None:
        """Save configuration to .cmdcenter/config.yaml in the project path."""
        from ruamel.yaml import YAML

        config_file = self.config_file
        config_file.parent.mkdir(parents=True, exist_ok=True)

        yaml = YAML()
        yaml.default_flow_style = False

        data = {
            "context": {
                "project_id": self.project_id,
                "project_type": self.project_type,
            },
            "output_format": self.output_format,
        }

        with config_file.open("w") as f:
            yaml.dump(data, f)

        logger.info(f"Saved configuration to {config_file}")


__all__ = ["AppConfig", "CONFIG_DIR", "CONFIG_FILE"]
