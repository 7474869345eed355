from typing import Iterator

from fastapi import Request
from sqlalchemy import create_engine, text
from sqlalchemy.orm import Session, declarative_base, sessionmaker

from cartshop.utils.logging import get_logger

Base = declarative_base()

log = get_logger("db")

# catalog inserted into an empty items table
SEED_ITEMS = [
    {"name": "Apple", "status": "ACTIVE"},
    {"name": "Milk", "status": "ACTIVE"},
    {"name": "Bread", "status": "ACTIVE"},
    {"name": "Eggs", "status": "ACTIVE"},
    {"name": "Rice", "status": "ACTIVE"},
]


class Database:
    """
    Owns the engine and session factory for one application instance.

    Created by the app lifespan at startup and disposed at shutdown; request
    handlers get sessions from it through ``get_db``.
    """

    def __init__(self, url: str, echo: bool = False):
        connect_args = {}
        if url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.url = url
        self.engine = create_engine(url, future=True, echo=echo, connect_args=connect_args)
        self.SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=self.engine)

    def session(self) -> Session:
        return self.SessionLocal()

    def init_db(self, seed: bool = True):
        """
        Create all tables and, if requested, seed the default catalog.
        Model modules are imported here so metadata is populated.
        """
        from cartshop.models import Item  # noqa: F401  registers every model

        Base.metadata.create_all(bind=self.engine)
        log.info("database tables ready (%s)", ", ".join(sorted(Base.metadata.tables)))

        if seed:
            self.seed_catalog()

    def seed_catalog(self) -> int:
        from cartshop.models import Item

        s = self.session()
        try:
            if s.query(Item).first():
                return 0
            for ent in SEED_ITEMS:
                s.add(Item(name=ent["name"], status=ent["status"]))
            s.commit()
            log.info("seeded %d catalog items", len(SEED_ITEMS))
            return len(SEED_ITEMS)
        finally:
            s.close()

    def ping(self) -> bool:
        with self.engine.connect() as conn:
            conn.execute(text("SELECT 1"))
        return True

    def dispose(self):
        self.engine.dispose()


def get_db(request: Request) -> Iterator[Session]:
    db = request.app.state.database.session()
    try:
        yield db
    finally:
        db.close()
