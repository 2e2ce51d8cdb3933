# ============================================================================
# FILE: moodmusic/db/session.py
# ============================================================================
from typing import Iterator
from fastapi import Request
from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

def create_db_engine(database_url: str) -> Engine:
    """Create the process-wide engine (one pooled handle shared by all requests)"""
    if database_url.startswith("sqlite"):
        connect_args = {"check_same_thread": False}
        if database_url in ("sqlite://", "sqlite:///:memory:"):
            # In-memory databases only exist on a single connection
            return create_engine(database_url, connect_args=connect_args, poolclass=StaticPool)
        return create_engine(database_url, connect_args=connect_args)
    return create_engine(database_url, pool_pre_ping=True)

def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)

def get_db(request: Request) -> Iterator[Session]:
    """Yield a session bound to the application's engine, closed after the request"""
    db = request.app.state.container.session_factory()
    try:
        yield db
    finally:
        db.close()
