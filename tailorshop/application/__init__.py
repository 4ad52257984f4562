# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services import JwtTokenService, WerkzeugPasswordHasher

__all__ = ["JwtTokenService", "WerkzeugPasswordHasher"]
