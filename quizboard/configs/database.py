from sqlmodel import SQLModel, create_engine, Session

from .settings import settings

DATABASE_URL = settings.database_url

connect_args = {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}

engine = create_engine(DATABASE_URL, echo=settings.DB_ECHO, connect_args=connect_args)


def init_db(bind=None):
    # Importing the models registers every table on SQLModel.metadata
    import quizboard.models  # noqa: F401

    SQLModel.metadata.create_all(bind or engine)


def get_db():
    with Session(engine) as session:
        yield session
