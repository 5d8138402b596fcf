# Copyright (C) 2025 Global Digital Labs (gdlabs.io)
# SPDX-License-Identifier: LGPL-3.0-or-later
"""Configuration package for the school admin backend.

Example:
    >>> from schooladmin.core.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.db.url)
"""

from schooladmin.core.config.settings import (
    APISettings,
    CORSSettings,
    DatabaseSettings,
    IdentityProviderSettings,
    SchoolSettings,
    Settings,
    clear_settings_cache,
    get_settings,
)

__all__ = [
    # Settings
    "Settings",
    "get_settings",
    "clear_settings_cache",
    # Subsettings
    "DatabaseSettings",
    "IdentityProviderSettings",
    "SchoolSettings",
    "CORSSettings",
    "APISettings",
]
