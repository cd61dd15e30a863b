# shortener/models.py
from sqlalchemy import Column, String, Text

from .database import Base
from .utils import SHORT_CODE_LENGTH


class Url(Base):
    __tablename__ = "url"

    short_url = Column("shortUrl", String(SHORT_CODE_LENGTH), primary_key=True)
    redirect_url = Column("redirectUrl", Text, nullable=False)

    def __repr__(self):
        return f"<Url {self.short_url} -> {self.redirect_url}>"
