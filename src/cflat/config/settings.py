# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Front-end settings and their YAML file format."""

from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

# ###############
# Public Interface
# ###############

SETTINGS_FILE_NAME = ".cflat.yaml"


class SettingsError(Exception):
    """Raised when a settings file cannot be read or is invalid."""


class FrontendSettings(BaseModel):
    """Options controlling tracing and parser strictness."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True)

    token_debug: bool = Field(alias="token-debug", default=False)
    ast_debug: bool = Field(alias="ast-debug", default=False)
    lenient_grouping: bool = Field(alias="lenient-grouping", default=False)

    def with_debug(self, token_debug: bool = False, ast_debug: bool = False) -> "FrontendSettings":
        """Return a copy with tracing switched on where requested."""
        return self.model_copy(
            update={
                "token_debug": self.token_debug or token_debug,
                "ast_debug": self.ast_debug or ast_debug,
            }
        )


def load_settings(path: Path) -> FrontendSettings:
    """Load and validate a settings file.

    An empty file is treated as all defaults.

    Args:
        path: Path to the ``.cflat.yaml`` file.

    Returns:
        A validated FrontendSettings instance.

    Raises:
        SettingsError: If the file cannot be read, contains invalid YAML,
            or does not conform to the expected schema.
    """
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise SettingsError(f"Cannot read settings file '{path}': {exc}") from exc

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as exc:
        raise SettingsError(f"Invalid YAML in settings file '{path}': {exc}") from exc

    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError(f"{path}: settings must be a YAML mapping")

    try:
        return FrontendSettings.model_validate(data)
    except ValidationError as exc:
        raise SettingsError(f"Invalid settings file '{path}': {exc}") from exc


def find_settings(source_file: Path) -> Path | None:
    """Return the settings file next to *source_file*, if there is one."""
    candidate = source_file.parent / SETTINGS_FILE_NAME
    if candidate.is_file():
        return candidate
    return None
