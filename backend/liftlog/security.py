from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import jwt
from jose.exceptions import JWTError
from liftlog.settings import get_settings

@dataclass(frozen=True, slots=True)
class CurrentUser:
    """The authenticated caller, as asserted by the identity provider."""
    id: str

def create_access_token(
    sub: str,
    *,
    expires_minutes: int = 60,
    extra: Optional[Dict[str, Any]] = None,
) -> str:
    """
    Sign a token the way the identity provider does. Used by local tooling
    and tests; production tokens come from the provider itself.
    """
    s = get_settings()
    now = datetime.now(timezone.utc)
    exp = now + timedelta(minutes=expires_minutes)
    payload: Dict[str, Any] = {
        "sub": sub,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    if s.JWT_AUDIENCE:
        payload["aud"] = s.JWT_AUDIENCE
    if extra:
        payload.update(extra)
    return jwt.encode(payload, s.JWT_SECRET, algorithm=s.JWT_ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature, expiration and (when configured) audience.
    Raise if token is expired/invalid.
    """
    s = get_settings()
    payload = jwt.decode(
        token,
        s.JWT_SECRET,
        algorithms=[s.JWT_ALGORITHM],
        audience=s.JWT_AUDIENCE,
        options={
            "verify_signature": True,
            "verify_exp": True,
            "verify_aud": s.JWT_AUDIENCE is not None,
        },
    )
    if "exp" not in payload:
        raise JWTError("Missing exp")
    return payload
