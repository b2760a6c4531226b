from datetime import datetime, timedelta, timezone

from jose import JWTError, jwt

from . import config
from .errors import InvalidToken


# Create a signed token naming the caller
def create_access_token(identity: str, expires_delta: int = None) -> str:
    if expires_delta is None:
        expires_delta = config.ACCESS_TOKEN_EXPIRE_MINUTES
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_delta)
    to_encode = {"sub": identity, "exp": expire}
    return jwt.encode(to_encode, config.SECRET_KEY, algorithm=config.ALGORITHM)


# Resolve the caller identity from a token
def decode_identity(token: str) -> str:
    try:
        payload = jwt.decode(token, config.SECRET_KEY, algorithms=[config.ALGORITHM])
    except JWTError as e:
        raise InvalidToken(str(e))
    identity = payload.get("sub")
    if not identity:
        raise InvalidToken("token carries no subject")
    return identity
