"""
Database configuration for the SQL-backed metric store.

This module sets up a SQLAlchemy engine and session factory based on the
configured database URI.  SQLite is supported out of the box.  The engine is
only touched when the SQL store is selected.
"""
from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base

from .config import settings


def make_engine(uri: str):
    # SQLite requires check_same_thread=False when sessions are used from
    # FastAPI's threadpool.  Other databases can omit this argument.
    connect_args: dict[str, object] = {}
    if uri.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
    return create_engine(uri, connect_args=connect_args)


engine = make_engine(settings.sql_database_uri)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Base class for models to inherit from.
Base = declarative_base()
