from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import APIKeyCookie, HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from fittrack.config import SECRET_KEY, ALGORITHM

# Tokens are issued by the external auth provider; this service only verifies them.
cookie_scheme = APIKeyCookie(name="access_token", auto_error=False)
bearer_scheme = HTTPBearer(auto_error=False)


def get_current_user_id(
    cookie_token: Optional[str] = Depends(cookie_scheme),
    bearer: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> str:
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Session expired. Please re-login.",
        headers={"WWW-Authenticate": "Bearer"},
    )

    token = bearer.credentials if bearer else cookie_token
    if not token or not SECRET_KEY:
        raise credentials_exception

    try:
        payload = jwt.decode(
            token,
            SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"verify_aud": False}
        )
    except JWTError:
        # This handles ExpiredSignatureError and other JWT issues
        raise credentials_exception

    user_id = payload.get("sub")
    if not user_id:
        raise credentials_exception
    return str(user_id)
