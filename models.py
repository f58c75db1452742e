# models.py
import datetime

from sqlalchemy import Column, ForeignKey, Integer, String, Text, TIMESTAMP
from sqlalchemy.orm import declarative_base

Base = declarative_base()


def _utcnow():
    return datetime.datetime.now(datetime.timezone.utc).replace(tzinfo=None)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    name = Column(Text, nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(Text, nullable=False)
    created_at = Column(TIMESTAMP, default=_utcnow)


class Article(Base):
    __tablename__ = "articles"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    title = Column(Text, nullable=False)
    # summary text, never the raw feed body
    content = Column(Text, nullable=False)
    category = Column(String(64), nullable=False, index=True)
    source = Column(Text, nullable=False)
    url = Column(Text, unique=True, nullable=False)
    created_at = Column(TIMESTAMP, default=_utcnow)


class UserPreference(Base):
    # no (user_id, category) uniqueness: several rows per pair are allowed
    __tablename__ = "user_preferences"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    category = Column(String(64), nullable=False)
    frequency = Column(Integer, nullable=False, default=0)
    created_at = Column(TIMESTAMP, default=_utcnow)


class UserInteraction(Base):
    __tablename__ = "user_interactions"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    news_id = Column(Integer, ForeignKey("articles.id"), nullable=False)
    action = Column(String(32), nullable=False)  # e.g. "click", "like"
    duration = Column(Integer, nullable=False, default=0)  # seconds
    created_at = Column(TIMESTAMP, default=_utcnow)
