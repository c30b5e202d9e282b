from sqlalchemy.orm import Session

from jobboard.models.user import User
from jobboard.core.security import hash_password, generate_id


def get_by_email(db: Session, email: str) -> User | None:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: str) -> User | None:
    return db.query(User).filter(User.id == user_id).first()


def create(
    db: Session,
    name: str,
    email: str,
    password: str,
    city: str | None = None,
    state: str | None = None,
) -> User:
    user = User(
        id=generate_id(),
        name=name,
        email=email,
        city=city,
        state=state,
        password_hash=hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    return user
