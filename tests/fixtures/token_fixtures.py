"""
Fixtures for token-related data.
"""

from typing import Any, Dict

VALID_TOKEN = "123456"
EXPIRED_TOKEN = "expired_token_000"
VALID_REFRESH_TOKEN = "abcd"
INVALID_REFRESH_TOKEN = "invalid"

# Refresh endpoint payloads
MOCK_REFRESH_RESPONSE = {"token": VALID_TOKEN}
MOCK_REFRESH_NOT_FOUND = {"message": "refresh token does not exist"}

# Application endpoint payloads
MOCK_AUTHORIZED = {"message": "authorized"}
MOCK_UNAUTHORIZED = {"message": "unauthorized"}


def get_mock_credentials(kind: str = "expired") -> Dict[str, Any]:
    """Get access/refresh token pairs for common scenarios."""
    credentials = {
        "valid": {"access_token": VALID_TOKEN, "refresh_token": VALID_REFRESH_TOKEN},
        "expired": {"access_token": EXPIRED_TOKEN, "refresh_token": VALID_REFRESH_TOKEN},
        "invalid_refresh": {
            "access_token": EXPIRED_TOKEN,
            "refresh_token": INVALID_REFRESH_TOKEN,
        },
    }
    return dict(credentials.get(kind, credentials["expired"]))
