import os
from contextlib import contextmanager

from sqlalchemy import (
    create_engine,
    Column,
    Integer,
    String,
    Float,
    Boolean,
    DateTime,
)
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()

PITCHES_TABLE = 'pitches'


def build_engine(db_path):
    """Open an engine on a SQLite file, creating its directory if missing."""
    db_dir = os.path.dirname(os.path.abspath(db_path))
    if not os.path.exists(db_dir):
        os.makedirs(db_dir)
    return create_engine(f"sqlite:///{db_path}")


def build_session_factory(engine):
    return sessionmaker(bind=engine, expire_on_commit=False)


@contextmanager
def session_scope(session_factory):
    """Provide a transactional scope around a series of operations."""
    session = session_factory()
    try:
        yield session
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()


# ============================================================
# PITCH OBSERVATIONS
# ============================================================
class Pitch(Base):
    __tablename__ = PITCHES_TABLE

    id = Column(Integer, primary_key=True, autoincrement=True)
    timestamp = Column(DateTime, nullable=False)

    pitch_type = Column(String, nullable=False)
    pitch_result = Column(String, nullable=False)

    # Historical column names: value_a holds MPH, value_b holds time-to-plate.
    speed_value = Column('value_a', Integer, nullable=True)
    time_value = Column('value_b', Float, nullable=True)

    fps = Column(Boolean, nullable=False, default=False)
    f2ps = Column(Boolean, nullable=False, default=False)
    csoop = Column(Boolean, nullable=False, default=False)
    lom = Column(Boolean, nullable=False, default=False)

    # SQLite only guarantees never-reused ids with AUTOINCREMENT.
    __table_args__ = {'sqlite_autoincrement': True}


# ============================================================
# DATABASE INITIALISATION
# ============================================================
def create_database(engine):
    """Create any missing tables. Safe to call repeatedly on the same file."""
    Base.metadata.create_all(engine, checkfirst=True)


if __name__ == "__main__":
    from config import DB_PATH

    create_database(build_engine(DB_PATH))
    print(f"Database ready at {DB_PATH}")
