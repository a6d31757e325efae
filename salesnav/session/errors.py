# Error taxonomy for the session URL codec.
# Every error is a local validation failure; `code` is the stable
# identifier returned to API callers.

from __future__ import annotations


class SessionUrlError(ValueError):
    """Base class for all codec failures."""
    code = "session_url_error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MalformedUrlError(SessionUrlError):
    """URL is not absolute, has no query component, or has the wrong path."""
    code = "malformed_url"


class QuerySyntaxError(MalformedUrlError):
    """The `query` parameter does not follow the search query grammar."""

    def __init__(self, message: str, position: int):
        super().__init__(f"{message} (at position {position})")
        self.position = position


class MissingSessionError(SessionUrlError):
    code = "missing_session"


class DecodeError(SessionUrlError):
    code = "decode_error"


class InvalidFilterError(SessionUrlError):
    """Unknown filter type, unknown selectionType, or a filter without values."""
    code = "invalid_filter"


class InvalidSearchTypeError(SessionUrlError):
    code = "invalid_search_type"
