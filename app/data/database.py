# app/data/database.py
from sqlalchemy import create_engine
from sqlalchemy.orm import declarative_base, sessionmaker

from app.utils.settings import DATABASE_URL, DB_ISOLATION_LEVEL


def build_engine(url: str = DATABASE_URL, isolation_level: str | None = DB_ISOLATION_LEVEL):
    kwargs = {"pool_pre_ping": True}
    if url.startswith("sqlite"):
        kwargs = {"connect_args": {"check_same_thread": False}}
    if isolation_level:
        kwargs["isolation_level"] = isolation_level
    return create_engine(url, **kwargs)


engine = build_engine()

# expire_on_commit=False: obiekty koszyka sa czytane juz po commicie (budowanie odpowiedzi)
SessionLocal = sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)

Base = declarative_base()


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
