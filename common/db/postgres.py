# SPDX-FileCopyrightText: 2024 Swiss Confederation
#
# SPDX-License-Identifier: MIT

import contextlib
import logging
from typing import Annotated
from collections.abc import Generator

from common.config import DBConfig

from sqlalchemy import create_engine, inspect, event, Engine
from sqlalchemy.orm import declarative_base, sessionmaker, DeclarativeBase, Session
from sqlalchemy.schema import CreateSchema
import sqlalchemy.exc

from fastapi import Depends, FastAPI, Request

#################
# DB Definition #
#################

_logger = logging.getLogger(__name__)


Base: DeclarativeBase = declarative_base()


def setup_db(db_connection_string: str, db_schema: str | None = None, **engine_kwargs) -> tuple[Engine, sessionmaker]:
    """Sets up a DB connection with the schema.

    The schema (and the matching search path) is only applied for postgres connections.
    Additional keyword arguments are handed to `sqlalchemy.create_engine`.
    """
    engine = create_engine(db_connection_string, **engine_kwargs)

    if db_schema and engine.dialect.name == "postgresql":

        @event.listens_for(engine, "connect", insert=True)
        def set_search_path(dbapi_connection, connection_record):
            """
            Setting Session search path every time a new connection is made
            https://docs.sqlalchemy.org/en/20/dialects/postgresql.html#setting-alternate-search-paths-on-connect
            """
            existing_autocommit = dbapi_connection.autocommit
            dbapi_connection.autocommit = True
            cursor = dbapi_connection.cursor()
            cursor.execute("SET SESSION search_path TO '%s'" % db_schema)
            cursor.close()
            dbapi_connection.autocommit = existing_autocommit

        inspector = inspect(engine)
        if db_schema not in inspector.get_schema_names():
            with engine.connect() as conn:
                conn.execute(CreateSchema(db_schema, if_not_exists=True))
                conn.commit()

    _session_local = sessionmaker(bind=engine)
    return engine, _session_local


@contextlib.contextmanager
def database_lifespan(app: FastAPI) -> Generator[None, None, None]:
    """Holds the database engine on the application state while the application is running.

    A failing connection is logged and not retried; sessions requested afterwards are `None`.
    """
    db_config = DBConfig()
    app.state.db_engine = None
    app.state.session_local = None
    try:
        app.state.db_engine, app.state.session_local = setup_db(
            db_connection_string=db_config.SQLALCHEMY_DATABASE_URL,
            db_schema=db_config.SQLALCHEMY_DATABASE_SCHEMA,
        )
    except sqlalchemy.exc.OperationalError:
        _logger.exception("Could not establish connection to database.")
    try:
        yield
    finally:
        if app.state.db_engine is not None:
            app.state.db_engine.dispose()
        app.state.db_engine = None
        app.state.session_local = None


def env_session(request: Request) -> Generator[Session | None, None, None]:
    session_local = getattr(request.app.state, "session_local", None)
    if session_local is None:
        _logger.error("Database session requested without an established connection.")
        yield None
        return
    db_session = session_local()
    try:
        yield db_session
    finally:
        db_session.close()


inject = Annotated[Session | None, Depends(env_session)]
