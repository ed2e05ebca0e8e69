# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Settings for the cflat front end."""

from cflat.config.settings import (
    SETTINGS_FILE_NAME,
    FrontendSettings,
    SettingsError,
    find_settings,
    load_settings,
)

__all__ = [
    "SETTINGS_FILE_NAME",
    "FrontendSettings",
    "SettingsError",
    "find_settings",
    "load_settings",
]
