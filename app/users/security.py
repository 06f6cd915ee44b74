# app/users/security.py

import logging
from datetime import datetime, timedelta
from typing import Optional

from passlib.context import CryptContext
from jose import ExpiredSignatureError, JWTError, jwt

from config.appconfig import settings
from app.helpers.time import utcnow

logger = logging.getLogger(__name__)

# Fixed token lifetime, not configurable per call
TOKEN_LIFETIME = timedelta(days=7)


# Password hashing context
pwd_context = CryptContext(schemes=["argon2"], deprecated="auto")


# ============================================================
# ✅ Verify Password
# ============================================================
def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognized hash
        return False


# ============================================================
# ✅ Get Password Hash
# ============================================================
def get_password_hash(password: str) -> str:
    """Hash a password."""
    return pwd_context.hash(password)


# ============================================================
# ✅ Token Codec
# ============================================================
class TokenCodec:
    """
    Issues and parses signed, time-limited identity tokens.

    The signing key is derived once, when the codec is built, and never
    changes afterwards. Tokens are self-contained: there is no server-side
    session and no revocation, only expiry.
    """

    def __init__(self, secret: str, algorithm: str = "HS256"):
        if not secret:
            raise ValueError("Token signing secret must not be empty")
        self._signing_key = secret
        self._algorithm = algorithm

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def issue(self, subject_key: str, now: Optional[datetime] = None) -> str:
        """Create a token for subject_key, valid for TOKEN_LIFETIME from now."""
        issued_at = now or utcnow()
        claims = {
            "sub": subject_key,
            "iat": issued_at,
            "exp": issued_at + TOKEN_LIFETIME,
        }
        return jwt.encode(claims, self._signing_key, algorithm=self._algorithm)

    def parse_subject(self, token: str) -> Optional[str]:
        """
        Verify signature and expiry and return the subject key.

        Every failure (malformed, tampered, expired, no subject) returns None.
        The reason is only logged, never returned.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._signing_key, algorithms=[self._algorithm])
        except ExpiredSignatureError:
            logger.warning("Rejected token: expired")
            return None
        except JWTError as e:
            logger.warning(f"Rejected token: {e}")
            return None

        subject = payload.get("sub")
        if not isinstance(subject, str) or not subject:
            logger.warning("Rejected token: missing subject")
            return None
        return subject


# Process-wide codec, built once from settings
token_codec = TokenCodec(settings.SECRET_KEY, settings.ALGORITHM)


def get_token_codec() -> TokenCodec:
    return token_codec
