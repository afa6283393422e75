from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

Base = declarative_base()


def sqlite_url(data_file) -> str:
    return f"sqlite:///{data_file}"


def create_db_engine(database_url: str) -> Engine:
    """Create an engine for the SQLite data file"""
    return create_engine(database_url, connect_args={"check_same_thread": False})


def create_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
