from sqlmodel import Session, create_engine
from settings import DATABASE_URL

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
engine = create_engine(DATABASE_URL, connect_args=connect_args)


def get_session():
    """FastAPI dependency yielding one session per request."""
    with Session(engine) as session:
        yield session
