import logging
from datetime import datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Request, status
from jose import JWTError, jwt
import bcrypt
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from ..config import ACCESS_TOKEN_EXPIRE_MINUTES, SECRET_KEY
from ..database import get_db
from ..exceptions import AuthError, ValidationError
from ..models import User
from ..schemas.user import Credentials, LoginResponse, RegisterResponse

router = APIRouter()

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    password_bytes = plain_password.encode('utf-8')[:72]
    hashed_bytes = hashed_password.encode('utf-8') if isinstance(hashed_password, str) else hashed_password
    return bcrypt.checkpw(password_bytes, hashed_bytes)


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt directly."""
    password_bytes = password.encode('utf-8')[:72]  # Truncate to 72 bytes (bcrypt limit)
    salt = bcrypt.gensalt()
    hashed = bcrypt.hashpw(password_bytes, salt)
    return hashed.decode('utf-8')


def _find_user(db: Session, username: str) -> Optional[User]:
    return db.query(User).filter(User.username == username).first()


def authenticate_user(db: Session, username: str, password: str) -> Optional[User]:
    """Authenticate a user."""
    user = _find_user(db, username)
    if not user:
        return None
    if not verify_password(password, user.hashed_password):
        return None
    return user


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token."""
    to_encode = data.copy()
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, SECRET_KEY, algorithm=ALGORITHM)


def _get_token_from_request(request: Request) -> Optional[str]:
    auth_header = request.headers.get("Authorization", "")
    if auth_header.lower().startswith("bearer "):
        return auth_header.split(" ", 1)[1].strip() or None
    return None


def _decode_token(token: str) -> Optional[str]:
    """Return the user id asserted by ``token``, or ``None`` if it is not valid."""
    try:
        payload = jwt.decode(token, SECRET_KEY, algorithms=[ALGORITHM])
    except JWTError as exc:
        logger.debug("Rejected token: %s", exc)
        return None
    user_id = payload.get("sub")
    return str(user_id) if user_id else None


def get_current_user(
    request: Request,
    db: Session = Depends(get_db),
) -> User:
    """Resolve the bearer token to a user, or fail with 401."""
    token = _get_token_from_request(request)
    if not token:
        raise AuthError("Not authenticated")

    user_id = _decode_token(token)
    if not user_id:
        raise AuthError("Could not validate credentials")

    user = db.query(User).filter(User.id == user_id).first()
    if user is None:
        logger.warning("Valid token for unknown user %s", user_id)
        raise AuthError("User not found")
    return user


def _require_credentials(credentials: Credentials):
    username = (credentials.username or "").strip()
    password = credentials.password or ""
    if not username or not password:
        raise ValidationError("Username and password required")
    return username, password


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    credentials: Credentials,
    db: Session = Depends(get_db),
):
    """Create a new user account."""
    username, password = _require_credentials(credentials)

    if _find_user(db, username):
        raise ValidationError("Username already taken")

    db_user = User(username=username, hashed_password=get_password_hash(password))
    db.add(db_user)
    try:
        db.commit()
    except IntegrityError:
        # Lost a race with another registration for the same name
        db.rollback()
        raise ValidationError("Username already taken")
    db.refresh(db_user)
    logger.info("Registered user %s", db_user.id)

    return {"message": "User registered", "userId": db_user.id}


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: Credentials,
    db: Session = Depends(get_db),
):
    """Sign in and get JWT token."""
    username, password = _require_credentials(credentials)

    db_user = authenticate_user(db, username, password)
    if not db_user:
        raise ValidationError("Invalid username or password")

    access_token = create_access_token(data={"sub": db_user.id})
    return {"message": "Login successful", "token": access_token}
