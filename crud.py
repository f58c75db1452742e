from typing import List, Optional

from sqlalchemy.orm import Session

from models import Article, User, UserInteraction, UserPreference


def get_article_by_id(db: Session, article_id: int):
    return db.query(Article).filter(Article.id == article_id).first()

def get_article_by_url(db: Session, url: str):
    return db.query(Article).filter(Article.url == url).first()

def get_articles_by_categories(db: Session, categories: List[str]):
    if not categories:
        return []
    return (
        db.query(Article)
        .filter(Article.category.in_(categories))
        .order_by(Article.created_at.desc(), Article.id.desc())
        .all()
    )

def create_article(db: Session, title: str, content: str, category: str, source: str, url: str) -> Article:
    article = Article(title=title, content=content, category=category, source=source, url=url)
    db.add(article)
    db.commit()
    db.refresh(article)
    return article


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()

def create_user(db: Session, name: str, email: str, password_hash: str) -> User:
    user = User(name=name, email=email, password_hash=password_hash)
    db.add(user)
    db.commit()
    db.refresh(user)
    return user


def get_preferences_for_user(db: Session, user_id: int):
    return db.query(UserPreference).filter(UserPreference.user_id == user_id).all()

def create_preference(db: Session, user_id: int, category: str, frequency: int) -> UserPreference:
    pref = UserPreference(user_id=user_id, category=category, frequency=frequency)
    db.add(pref)
    db.commit()
    db.refresh(pref)
    return pref


def create_interaction(db: Session, user_id: int, news_id: int, action: str, duration: int) -> UserInteraction:
    interaction = UserInteraction(user_id=user_id, news_id=news_id, action=action, duration=duration)
    db.add(interaction)
    db.commit()
    db.refresh(interaction)
    return interaction
