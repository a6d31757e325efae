# Session-aware search URL codec.
# Pure functions: extract a session token from a search URL, decode it, and
# rebuild a search URL from a structured request.

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional
from urllib.parse import SplitResult, unquote, urlsplit

from salesnav.logging_config import get_logger
from salesnav.settings import settings
from .codec import TokenCodec, encode_uri_component, get_codec
from .errors import DecodeError, InvalidFilterError, MalformedUrlError, MissingSessionError
from .query import dump_query, load_query
from .types import ParsedSearchUrl, SearchFilter, SearchRequest, SearchType, SessionToken

logger = get_logger(__name__)

QUERY_PARAM = "query"
VIEW_ALL_FILTERS_PARAM = "viewAllFilters"

_SEARCH_PATH = re.compile(r"/sales/search/(?P<search_type>[A-Za-z]+)/?$")


# -------------------------
# URL helpers
# -------------------------
def _split(url: str) -> SplitResult:
    if not isinstance(url, str) or not url.strip():
        raise MalformedUrlError("URL is required")
    try:
        parts = urlsplit(url.strip())
    except ValueError as e:
        raise MalformedUrlError(f"URL could not be parsed: {e}") from e
    if parts.scheme not in ("http", "https") or not parts.netloc:
        raise MalformedUrlError("URL must be absolute (http or https with a host)")
    if not parts.query:
        raise MalformedUrlError("URL has no query component")
    return parts


def _raw_param(query: str, name: str) -> Optional[str]:
    """First non-empty value of `name`, exactly as it appears in the URL."""
    for pair in query.split("&"):
        key, _, value = pair.partition("=")
        if unquote(key) == name and value:
            return value
    return None


def _has_flag(query: str, name: str) -> bool:
    return any(unquote(pair.partition("=")[0]) == name for pair in query.split("&"))


# -------------------------
# Public API
# -------------------------
def decode(encoded: str, codec: Optional[TokenCodec] = None) -> str:
    """Reverse the transport encoding of a session token."""
    return (codec or get_codec()).decode(encoded)


def extract_session_token(
    url: str,
    codec: Optional[TokenCodec] = None,
    param: Optional[str] = None,
) -> SessionToken:
    """
    Locate the session parameter of a search URL.
    Raises MalformedUrlError when the URL has no usable query component,
    MissingSessionError when the parameter is absent or empty, and
    DecodeError when its value is not a valid encoding.
    """
    parts = _split(url)
    param = param or settings.SESSION_PARAM
    raw = _raw_param(parts.query, param)
    if raw is None:
        raise MissingSessionError(f"No {param} parameter found in the URL")
    token = SessionToken.from_encoded(raw, codec or get_codec())
    logger.debug("session_extracted", param=param, encoded_length=len(token.encoded))
    return token


def search_query_record(request: SearchRequest) -> Dict[str, Any]:
    """The record serialized into the `query` parameter, in platform field order."""
    record: Dict[str, Any] = {
        "spellCorrectionEnabled": True,
        "recentSearchParam": {"doLogHistory": True},
    }
    if request.filters:
        record["filters"] = [f.to_dict() for f in request.filters]
    if request.keywords:
        record["keywords"] = request.keywords
    return record


def build_query_string(request: SearchRequest) -> str:
    return dump_query(search_query_record(request))


def build_search_url(
    request: SearchRequest,
    base_url: Optional[str] = None,
    codec: Optional[TokenCodec] = None,
    param: Optional[str] = None,
) -> str:
    """Serialize a request into a complete search URL carrying its session token."""
    codec = codec or get_codec()
    base_url = (base_url or settings.SEARCH_BASE_URL).rstrip("/")
    param = param or settings.SESSION_PARAM

    search_type = SearchType.parse(request.search_type)
    query_string = build_query_string(request)
    url = f"{base_url}/{search_type.value}?{QUERY_PARAM}={encode_uri_component(query_string)}"

    token = request.session_token
    if token is not None:
        if not codec.embeddable(token.encoded):
            raise DecodeError("Session token's encoded form is not URL-safe")
        url += f"&{param}={token.encoded}"

    if request.view_all_filters:
        url += f"&{VIEW_ALL_FILTERS_PARAM}=true"

    logger.debug(
        "search_url_built",
        search_type=search_type.value,
        filters=len(request.filters),
        with_session=token is not None,
    )
    return url


def _filters_from_record(raw: Any) -> List[SearchFilter]:
    if raw is None:
        return []
    if not isinstance(raw, list):
        raise InvalidFilterError("filters must be a List(...)")
    return [SearchFilter.from_dict(f) for f in raw]


def parse_search_url(
    url: str,
    codec: Optional[TokenCodec] = None,
    param: Optional[str] = None,
) -> ParsedSearchUrl:
    """Recover search type, keywords, filters and session from a search URL."""
    parts = _split(url)
    param = param or settings.SESSION_PARAM

    m = _SEARCH_PATH.search(parts.path)
    if not m:
        raise MalformedUrlError("URL is not a Sales Navigator search URL")
    try:
        search_type = SearchType(m.group("search_type"))
    except ValueError:
        raise MalformedUrlError(f"Unsupported search path {parts.path!r}") from None

    raw_session = _raw_param(parts.query, param)
    token = SessionToken.from_encoded(raw_session, codec or get_codec()) if raw_session else None

    raw_query = _raw_param(parts.query, QUERY_PARAM)
    keywords: Optional[str] = None
    filters: List[SearchFilter] = []
    query_string: Optional[str] = None
    if raw_query is not None:
        query_string = unquote(raw_query)
        record = load_query(query_string)
        kw = record.get("keywords")
        keywords = kw if isinstance(kw, str) else None
        filters = _filters_from_record(record.get("filters"))

    return ParsedSearchUrl(
        search_type=search_type,
        keywords=keywords,
        filters=filters,
        session_token=token,
        view_all_filters=_has_flag(parts.query, VIEW_ALL_FILTERS_PARAM),
        query_string=query_string,
    )
