# Session URL codec package.
# Exports the codec operations, data models and error taxonomy.

from .codec import Base64TokenCodec, PercentTokenCodec, TokenCodec, get_codec
from .errors import (
    DecodeError,
    InvalidFilterError,
    InvalidSearchTypeError,
    MalformedUrlError,
    MissingSessionError,
    QuerySyntaxError,
    SessionUrlError,
)
from .types import (
    FilterType,
    FilterValue,
    ParsedSearchUrl,
    SearchFilter,
    SearchRequest,
    SearchType,
    SelectionType,
    SessionToken,
)
from .urls import build_query_string, build_search_url, decode, extract_session_token, parse_search_url

__all__ = [
    "Base64TokenCodec", "PercentTokenCodec", "TokenCodec", "get_codec",
    "DecodeError", "InvalidFilterError", "InvalidSearchTypeError", "MalformedUrlError",
    "MissingSessionError", "QuerySyntaxError", "SessionUrlError",
    "FilterType", "FilterValue", "ParsedSearchUrl", "SearchFilter", "SearchRequest",
    "SearchType", "SelectionType", "SessionToken",
    "build_query_string", "build_search_url", "decode", "extract_session_token", "parse_search_url",
]
