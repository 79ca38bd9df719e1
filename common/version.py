# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

"""Build information injected into the container image."""

import os

commit_hash = os.getenv("COMMIT_HASH", "no hash")
commit_time = os.getenv("COMMIT_TIMESTAMP", "no timestamp")
version = os.getenv("VERSION", "no version")


def get_version() -> str:
    """Version as shown in the OpenAPI documentation, e.g. `1.2.0 (3f2a9c1 2024-05-01T10:00:00Z)`."""
    return f"{version} ({commit_hash} {commit_time})"
