import logging
from pathlib import Path
from typing import Generator

from sqlalchemy import create_engine, text
from sqlalchemy.engine import make_url
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import declarative_base, sessionmaker, Session
from sqlalchemy.pool import StaticPool

from student_api.core.exceptions import StorageFailure

logger = logging.getLogger(__name__)

# Create Base class for models
Base = declarative_base()


class Database:
    """
    Engine and session factory for one database URL.

    The application factory builds a single instance and stores it on
    ``app.state.database``; request handlers reach it through the ``get_db``
    dependency instead of importing a module-level engine.
    """

    def __init__(self, url: str, echo: bool = False):
        self.url = make_url(url)

        engine_kwargs = {
            # Test connection before using (detect disconnects)
            "pool_pre_ping": True,
            # SQL echo - useful for debugging
            "echo": echo,
        }
        if self.url.get_backend_name() == "sqlite":
            # Sessions are used from FastAPI's threadpool
            engine_kwargs["connect_args"] = {"check_same_thread": False}
            if self.is_memory:
                # Every connection must see the same in-memory database
                engine_kwargs["poolclass"] = StaticPool

        self.engine = create_engine(self.url, **engine_kwargs)
        self.SessionLocal = sessionmaker(
            autoflush=False,   # Don't auto-flush before queries
            bind=self.engine,
            expire_on_commit=False  # Don't expire objects after commit
        )

    @property
    def is_memory(self) -> bool:
        return self.url.get_backend_name() == "sqlite" and self.url.database in (None, "", ":memory:")

    def session(self) -> Generator[Session, None, None]:
        """
        Yield a session and close it afterwards (even if an error occurs).
        """
        db = self.SessionLocal()
        try:
            yield db
        finally:
            db.close()

    def init(self):
        """
        Initialize database.
        Run this when starting the application: makes sure the SQLite
        directory exists and the tables are created.
        """
        logger.info("Initializing database...")

        if self.url.get_backend_name() == "sqlite" and not self.is_memory:
            Path(self.url.database).parent.mkdir(parents=True, exist_ok=True)

        # Check connection
        if not self.check_connection():
            raise StorageFailure("cannot connect to database")

        self.create_tables()
        logger.info("Database initialized at %s", self.url.render_as_string(hide_password=True))

    def create_tables(self):
        """
        Create all database tables defined in models.
        Existing tables are left untouched.
        """
        # Register models on Base.metadata
        from student_api.models import student  # noqa: F401

        Base.metadata.create_all(bind=self.engine)

    def drop_tables(self):
        """
        Drop all database tables.

        ⚠️ DANGER: This will delete all data!
        Only use in development/testing.
        """
        logger.warning("Dropping all database tables...")
        Base.metadata.drop_all(bind=self.engine)

    def check_connection(self) -> bool:
        """
        Check if database connection is working.

        Returns:
            bool: True if connection successful, False otherwise
        """
        try:
            with self.engine.connect() as connection:
                connection.execute(text("SELECT 1"))
            return True
        except SQLAlchemyError as e:
            logger.error("Database connection failed: %s", e)
            return False

    def dispose(self):
        self.engine.dispose()
