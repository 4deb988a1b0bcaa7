import logging
from datetime import datetime, timedelta, timezone
from typing import Optional, Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError, jwt
import bcrypt

from ...core.config import SECRET_KEY, ALGORITHM, ACCESS_TOKEN_EXPIRE_MINUTES
from . import models, service as auth_service
from .schemas import Identity

logger = logging.getLogger(__name__)

ADMIN_ROLES = ("admin", "superadmin")
STAFF_ROLES = ("admin", "superadmin", "worker")

# auto_error is off so a missing header gets the same envelope as a bad token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/firebase/token", auto_error=False)


class InvalidCredentialsError(Exception):
    """Raised when a bearer token is malformed, tampered with or expired."""


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return bcrypt.checkpw(plain_password.encode('utf-8'), hashed_password.encode('utf-8'))


def get_password_hash(password: str) -> str:
    hashed = bcrypt.hashpw(password.encode('utf-8'), bcrypt.gensalt())
    return hashed.decode('utf-8')


class TokenVerifier:
    """Issues and verifies the signed bearer tokens that identify callers.

    A single instance is created at process start and stored on
    ``app.state``; handlers receive it through ``get_token_verifier``.
    """

    def __init__(
        self,
        secret_key: str = SECRET_KEY,
        algorithm: str = ALGORITHM,
        expire_minutes: int = ACCESS_TOKEN_EXPIRE_MINUTES,
    ):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.expire_minutes = expire_minutes

    def issue(self, user: models.User, expires_delta: Optional[timedelta] = None) -> str:
        expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=self.expire_minutes))
        to_encode = {
            "sub": user.public_id,
            "email": user.email,
            "name": user.name,
            "exp": expire,
        }
        return jwt.encode(to_encode, self.secret_key, algorithm=self.algorithm)

    def verify(self, token: str) -> Identity:
        try:
            payload = jwt.decode(token, self.secret_key, algorithms=[self.algorithm])
        except JWTError as e:
            raise InvalidCredentialsError(str(e)) from e
        sub: Optional[str] = payload.get("sub")
        if not sub:
            raise InvalidCredentialsError("Token subject is missing")
        return Identity(subject_id=sub, email=payload.get("email"), display_name=payload.get("name"))


def get_token_verifier(request: Request) -> TokenVerifier:
    return request.app.state.token_verifier


async def get_current_identity(
    token: Annotated[Optional[str], Depends(oauth2_scheme)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> Identity:
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No token provided or invalid format",
            headers={"WWW-Authenticate": "Bearer"},
        )
    try:
        return verifier.verify(token)
    except InvalidCredentialsError as e:
        logger.warning(f"Token verification failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
            headers={"WWW-Authenticate": "Bearer"},
        )


def require_roles(*allowed_roles: str):
    """Builds a dependency that admits callers whose stored role is allowed.

    The role is read from the ``users`` collection on every request, so a
    role change takes effect without re-issuing tokens.
    """

    async def role_gate(identity: Annotated[Identity, Depends(get_current_identity)]) -> models.User:
        try:
            user = await auth_service.get_user_by_public_id(identity.subject_id)
        except Exception as e:
            logger.error(f"Error checking user role: {e}", exc_info=True)
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail="Error checking permissions",
            )
        if user is None:
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="User not found")
        if user.effective_role not in allowed_roles:
            logger.info(f"User {user.public_id} with role {user.effective_role} denied; needs one of {allowed_roles}")
            raise HTTPException(status_code=status.HTTP_403_FORBIDDEN, detail="Insufficient permissions")
        return user

    return role_gate


get_current_admin_user = require_roles(*ADMIN_ROLES)
get_current_staff_user = require_roles(*STAFF_ROLES)
