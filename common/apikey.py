# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import secrets

from fastapi import Security, HTTPException, status
from fastapi.security import APIKeyHeader

from common import config


def require_api_key(conf: config.inject, api_key: str = Security(APIKeyHeader(name="x-api-key", auto_error=False))) -> None:
    """Rejects requests of scanning terminals which do not present the configured api key."""
    if api_key is None or not secrets.compare_digest(api_key, conf.api_key):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid or missing API Key")
