from sqlalchemy import Column, Integer, String, Text
from sqlalchemy.orm import declarative_base

Base = declarative_base()


class ShortURL(Base):
    __tablename__ = "short_urls"

    id = Column(Integer, primary_key=True, autoincrement=True)

    # Uniqueness of short_code is enforced by the schema; long_url uniqueness
    # is enforced by the create service under its lock.
    short_code = Column(String(255), unique=True, index=True, nullable=False)
    long_url = Column(Text, nullable=False)
