"""
Access token issuance for logged-in users

Tokens are signed with the server secret and carry the user's email and an
expiry. No route verifies them; decoding is provided for diagnostics.
"""

import jwt
import time
import logging
from datetime import timedelta
from typing import Dict, Any

from config.settings import JWT_SECRET, JWT_ALGORITHM, TOKEN_TTL

logger = logging.getLogger(__name__)

class AccessTokenService:
    """Service for generating and decoding user access tokens"""

    def __init__(self, secret_key: str = JWT_SECRET, algorithm: str = JWT_ALGORITHM, ttl: timedelta = TOKEN_TTL):
        self.secret_key = secret_key
        self.algorithm = algorithm
        self.ttl_seconds = int(ttl.total_seconds())

    def generate_access_token(self, email: str) -> str:
        """
        Generate a signed token for a user

        Args:
            email: Email of the authenticated user

        Returns:
            JWT token string
        """
        current_time = int(time.time())

        payload = {
            "email": email,
            "iat": current_time,
            "exp": current_time + self.ttl_seconds
        }

        token = jwt.encode(payload, self.secret_key, algorithm=self.algorithm)

        logger.info(f"Generated access token for {email} valid for {self.ttl_seconds}s")
        return token

    def decode_access_token(self, token: str) -> Dict[str, Any]:
        """
        Validate signature and expiry and return the claims

        Raises:
            jwt.InvalidTokenError: If the token is expired, tampered or malformed
        """
        try:
            return jwt.decode(
                token,
                self.secret_key,
                algorithms=[self.algorithm],
                options={"require": ["email", "exp", "iat"]}
            )
        except jwt.ExpiredSignatureError:
            logger.warning("Access token has expired")
            raise
        except jwt.InvalidTokenError as e:
            logger.warning(f"Access token validation failed: {str(e)}")
            raise


# Global service instance
access_token_service = AccessTokenService()

def get_token_service() -> AccessTokenService:
    return access_token_service
