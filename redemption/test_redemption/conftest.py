# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import typing

import pytest
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

import common.db.postgres as db
import redemption.db.certificate  # noqa: F401 registers the tables on the metadata
import redemption.test_redemption.hard_coded as hc


@pytest.fixture()
def session_local() -> typing.Generator[sessionmaker, None, None]:
    """
    SQLite in-memory database standing in for postgres.
    StaticPool so all sessions (and threads) see the same database.
    """
    engine, _session_local = db.setup_db(
        "sqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    db.Base.metadata.create_all(engine)
    yield _session_local
    engine.dispose()


@pytest.fixture()
def seeded_session_local(session_local: sessionmaker) -> sessionmaker:
    hc.seed(session_local)
    return session_local
