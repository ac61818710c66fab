from .handling import categorize_error, log_error
from .internal import (
    AuthorizationFailure,
    InternalError,
    NetworkError,
    OAuthError,
    ParsingError,
    RefreshExchangeFailure,
    ResponseError,
)

__all__ = [
    "AuthorizationFailure",
    "InternalError",
    "NetworkError",
    "OAuthError",
    "ParsingError",
    "RefreshExchangeFailure",
    "ResponseError",
    "categorize_error",
    "log_error",
]
