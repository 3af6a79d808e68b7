from datetime import datetime, timedelta, UTC
from typing import Optional

from jose import jwt
from passlib.context import CryptContext
from sqlmodel import Session, select

from quizboard.configs import settings
from quizboard.models import User

ALGORITHM = "HS256"

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def verify_password(plain_password, hashed_password):
    return pwd_context.verify(plain_password, hashed_password)


def get_password_hash(password):
    return pwd_context.hash(password)


def authenticate_user(db_session: Session, email: str, password: str) -> Optional[User]:
    statement = select(User).where(User.email == email)
    result = db_session.exec(statement).first()
    if not result or not verify_password(password, result.password):
        return None
    return result


def create_access_token(user: User, expires_delta: timedelta | None = None) -> str:
    to_encode = {
        "sub": user.username,
        "id": user.id,
        "email": user.email,
        "role": user.role.value,
    }
    expire = datetime.now(UTC) + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.JWT_ACCESS_SECRET, algorithm=ALGORITHM)


def decode_access_token(token: str) -> dict:
    return jwt.decode(token, settings.JWT_ACCESS_SECRET, algorithms=[ALGORITHM])
