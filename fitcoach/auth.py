import datetime as dt
import logging
from typing import Any

import jwt
from passlib.context import CryptContext

from .config import JWT_SECRET, JWT_ALGORITHM, JWT_EXPIRE_SEC
from .errors import InvalidToken

logger = logging.getLogger(__name__)

# Use PBKDF2 (no bcrypt dependency problems)
_pwd = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

def hash_password(pw: str) -> str:
    return _pwd.hash(pw)

def verify_password(pw: str, pw_hash: str) -> bool:
    return _pwd.verify(pw, pw_hash)


class TokenManager:
    """
    Issues and checks signed session tokens.
    Claims are {id, username, role}; iat/exp are stamped on issue.
    Nothing is stored server side, an old token just stops verifying once expired.
    """

    def __init__(self, secret: str, expire_sec: int = 3600, algorithm: str = "HS256") -> None:
        self.secret = secret
        self.expire_sec = expire_sec
        self.algorithm = algorithm

    def issue(self, claims: dict[str, Any]) -> str:
        now = dt.datetime.now(dt.timezone.utc)
        payload = {
            "id": claims["id"],
            "username": claims["username"],
            "role": claims["role"],
            "iat": int(now.timestamp()),
            "exp": int((now + dt.timedelta(seconds=self.expire_sec)).timestamp()),
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: str) -> dict[str, Any]:
        try:
            return jwt.decode(token, self.secret, algorithms=[self.algorithm])
        except jwt.ExpiredSignatureError:
            raise InvalidToken("Token has expired.")
        except jwt.PyJWTError:
            raise InvalidToken()

    def decode(self, token: str) -> dict[str, Any]:
        """
        Read claims without checking signature or expiry.
        Only for inspection, never for trust decisions.
        """
        try:
            return jwt.decode(token, options={"verify_signature": False})
        except jwt.PyJWTError:
            raise InvalidToken("Malformed token.")

    def renew(self, token: str) -> str:
        payload = self.verify(token)
        rest = {k: v for k, v in payload.items() if k not in ("iat", "exp")}
        logger.info("Renewing token for user id=%s", rest.get("id"))
        return self.issue(rest)


tokens = TokenManager(JWT_SECRET, JWT_EXPIRE_SEC, JWT_ALGORITHM)
