from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from boxoffice.core.config import settings

# One pooled connection per request; the store is the only shared mutable resource
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True
)

SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

Base = declarative_base()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
