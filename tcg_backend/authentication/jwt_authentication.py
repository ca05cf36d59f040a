import hashlib
import logging
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

import jwt
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from pydantic import ValidationError

from tcg_backend.load_secrets import jwt_expires_days, jwt_secret, pepper_data
from tcg_backend.models.dc_models import TokenPayloadModel

JWT_ALGORITHM = "HS256"

security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


class JWTAuthentication:
    def __init__(
        self,
        secret: str = jwt_secret,
        pepper: str = pepper_data,
        expires_in: timedelta = timedelta(days=jwt_expires_days),
    ):
        self.secret = secret
        self.pepper = pepper
        self.expires_in = expires_in

    def hash_password(self, password: str, salt: Optional[str] = None) -> Tuple[str, str]:
        """Hash the password with a per-user salt and the server pepper

        Args:
            password (str): Plain password sent by the client
            salt (Optional[str]): Existing salt; a new one is generated when omitted

        Returns:
            Tuple[str, str]: hashed password and the salt used
        """
        if salt is None:
            salt = secrets.token_hex(8)
        hashed_password = hashlib.sha256((password + salt + self.pepper).encode()).hexdigest()
        return hashed_password, salt

    def verify_password(self, password: str, salt: str, hash_password: str) -> bool:
        hashed_password, _ = self.hash_password(password, salt)
        return secrets.compare_digest(hashed_password, hash_password)

    def create_access_token(self, user_id: int, email: str) -> str:
        """Sign a token carrying the user id and email, valid for ``expires_in``"""
        now = datetime.now(timezone.utc)
        payload = {
            "userId": user_id,
            "email": email,
            "iat": now,
            "exp": now + self.expires_in,
        }
        return jwt.encode(payload, self.secret, algorithm=JWT_ALGORITHM)

    def decode_access_token(self, token: str) -> TokenPayloadModel:
        """Verify the token and return its payload.

        Raises:
            HTTPException: 401 when the token is expired, malformed or badly signed
        """
        try:
            payload = jwt.decode(token, self.secret, algorithms=[JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise _unauthorized("Token expired")
        except jwt.InvalidTokenError as e:
            logging.info(f"Rejected token: {e}")
            raise _unauthorized("Invalid token")

        try:
            return TokenPayloadModel.model_validate(payload)
        except ValidationError:
            raise _unauthorized("Invalid token")

    async def get_current_user(
        self, credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
    ) -> TokenPayloadModel:
        """Dependency for routes that need a signed-in user.

        Reads ``Authorization: Bearer <token>``.
        """
        if credentials is None or not credentials.credentials:
            raise _unauthorized("Missing token")
        return self.decode_access_token(credentials.credentials)


jwt_auth = JWTAuthentication()
