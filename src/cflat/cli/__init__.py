# Copyright 2026 cflat Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command-line interface for cflat."""
