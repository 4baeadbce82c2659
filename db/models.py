"""
Database models for the planner's document storage.
"""
from sqlalchemy import create_engine, Column, String, DateTime, JSON
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.sql import func

Base = declarative_base()

DEFAULT_DATABASE_URL = "sqlite:///planner.db"


class Document(Base):
    """A whole JSON document stored under a key."""
    __tablename__ = "documents"

    key = Column(String(100), primary_key=True)
    value = Column(JSON, nullable=True)
    created_at = Column(DateTime, nullable=False, default=func.now())
    updated_at = Column(DateTime, nullable=False, default=func.now(), onupdate=func.now())


class Database:
    """Database manager."""

    def __init__(self, database_url: str = DEFAULT_DATABASE_URL):
        self.engine = create_engine(database_url)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def init_db(self):
        """Initialize database tables."""
        Base.metadata.create_all(bind=self.engine)

    def get_session(self) -> Session:
        """Get database session."""
        return self.SessionLocal()

    def close_session(self, session: Session):
        """Close database session."""
        session.close()
