# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Tailoring shop backend: auth, requisitions and an API client."""

__version__ = "0.1.0"
