# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Sphinx configuration for the cflat documentation."""

project = "cflat"
author = "cflat Contributors"
release = "0.1.0"

extensions: list[str] = ["sphinx.ext.autodoc"]

html_theme = "alabaster"
