# shortener/storage.py
from abc import ABC, abstractmethod

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from .database import Base
from .models import Url


class StorageError(Exception):
    pass


class UrlNotFoundError(StorageError):
    pass


class Storage(ABC):
    @abstractmethod
    def init(self) -> None:
        ...

    @abstractmethod
    def create_short_url(self, url: Url) -> None:
        ...

    @abstractmethod
    def get_url_from_short_url(self, short_code: str) -> Url:
        """Raises UrlNotFoundError when no row matches."""


class SQLStorage(Storage):
    def __init__(self, session_factory, engine):
        self.session_factory = session_factory
        self.engine = engine

    def init(self) -> None:
        try:
            with self.engine.connect() as conn:
                conn.execute(text("SELECT 1"))
            Base.metadata.create_all(bind=self.engine, tables=[Url.__table__])
        except SQLAlchemyError as e:
            raise StorageError(f"unable to initialize database: {e}") from e

    def create_short_url(self, url: Url) -> None:
        db = self.session_factory()
        try:
            db.add(Url(short_url=url.short_url, redirect_url=url.redirect_url))
            db.commit()
        except SQLAlchemyError as e:
            db.rollback()
            raise StorageError(f"unable to write to database: {e}") from e
        finally:
            db.close()

    def get_url_from_short_url(self, short_code: str) -> Url:
        db = self.session_factory()
        try:
            url_obj = db.query(Url).filter_by(short_url=short_code).first()
        except SQLAlchemyError as e:
            raise StorageError(f"unable to read from database: {e}") from e
        finally:
            db.close()

        if url_obj is None:
            raise UrlNotFoundError(short_code)
        return url_obj
