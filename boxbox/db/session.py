# boxbox/db/session.py
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from boxbox.core.config import settings

# SQLite connections are shared with the request threadpool
connect_args = {"check_same_thread": False} if settings.database_url.startswith("sqlite") else {}

engine = create_engine(settings.database_url, future=True, echo=settings.echo_sql, connect_args=connect_args)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# Dependency for FastAPI
def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
