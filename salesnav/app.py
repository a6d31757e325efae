# ============================================================
# SalesNav Session API (FastAPI)
# ------------------------------------------------------------
# Thin HTTP layer over salesnav.session:
#   - Extract / decode the session token of a search URL
#   - Generate search URLs (with or without a session token)
#   - Parse search URLs back into structured requests
#   - Filter catalog + filter validation
# Codec failures become {"success": false, "error", "code"} with HTTP 400.
# ============================================================

from typing import Any, Dict, List, Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

# --- Local imports ---
from salesnav import __version__
from salesnav.logging_config import configure_logging, get_logger
from salesnav.settings import settings
from salesnav.session import (
    MissingSessionError,
    SearchFilter,
    SearchRequest,
    SearchType,
    SessionToken,
    SessionUrlError,
    build_query_string,
    build_search_url,
    extract_session_token,
    get_codec,
    parse_search_url,
)
from salesnav.session.filters import load_filter_catalog, validate_filters

configure_logging()
logger = get_logger(__name__)

# ------------------------------------------------------------
# 🚀 FastAPI init
# ------------------------------------------------------------
app = FastAPI(title=settings.APP_NAME, version=__version__)

# ------------------------------------------------------------
# 📦 Pydantic models
# ------------------------------------------------------------
class FilterValueModel(BaseModel):
    id: Optional[str] = Field(None, description="Platform id, e.g. urn:li:organization:825160")
    text: str = Field(..., description="Displayed label of the value")
    selectionType: str = Field("INCLUDED", description="INCLUDED or EXCLUDED")


class SearchFilterModel(BaseModel):
    type: str = Field(..., description="Filter type, e.g. CURRENT_COMPANY")
    values: List[FilterValueModel] = Field(default_factory=list)


class ExtractSessionRequest(BaseModel):
    url: str


class ExtractSessionResponse(BaseModel):
    success: bool = True
    sessionId: str
    decodedSessionId: str
    message: str


class GenerateUrlRequest(BaseModel):
    searchType: str = Field(..., description="people or company")
    keywords: Optional[str] = ""
    filters: Optional[List[SearchFilterModel]] = None
    sessionId: Optional[str] = Field(None, description="Session token, encoded or decoded")
    viewAllFilters: bool = False


class GenerateUrlResponse(BaseModel):
    success: bool = True
    url: str
    searchType: str
    sessionId: Optional[str] = None
    filters: List[Dict[str, Any]]
    queryString: str
    message: str


class ParseUrlRequest(BaseModel):
    url: str


class ParseUrlResponse(BaseModel):
    success: bool = True
    searchType: str
    keywords: Optional[str] = None
    filters: List[Dict[str, Any]]
    sessionId: Optional[str] = None
    decodedSessionId: Optional[str] = None
    viewAllFilters: bool
    queryString: Optional[str] = None
    originalUrl: str


class ValidateFiltersRequest(BaseModel):
    searchType: str
    filters: List[Any]


# ------------------------------------------------------------
# 🧯 Error envelopes
# ------------------------------------------------------------
def _failure(status_code: int, error: str, code: Optional[str] = None) -> JSONResponse:
    content: Dict[str, Any] = {"success": False, "error": error}
    if code:
        content["code"] = code
    return JSONResponse(status_code=status_code, content=content)


@app.exception_handler(SessionUrlError)
async def session_url_error_handler(request: Request, exc: SessionUrlError):
    logger.info("request_rejected", path=request.url.path, code=exc.code, error=exc.message)
    return _failure(400, exc.message, exc.code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    details = "; ".join(
        f"{'.'.join(str(p) for p in err.get('loc', ()))}: {err.get('msg')}" for err in exc.errors()
    )
    logger.info("request_invalid", path=request.url.path, error=details)
    return _failure(400, details or "Invalid request body", "invalid_request")


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.error("request_failed", path=request.url.path, method=request.method, error=str(exc), exc_info=True)
    return _failure(500, "Internal server error")


# ------------------------------------------------------------
# 🔧 Helpers
# ------------------------------------------------------------
def _to_search_request(req: GenerateUrlRequest, require_session: bool) -> SearchRequest:
    """Convert the request body into the codec's SearchRequest."""
    search_type = SearchType.parse(req.searchType)
    if require_session and not req.sessionId:
        raise MissingSessionError("sessionId is required")
    token = SessionToken.from_value(req.sessionId, get_codec()) if req.sessionId else None
    filters = [SearchFilter.from_dict(f.model_dump()) for f in (req.filters or [])]
    return SearchRequest(
        search_type=search_type,
        keywords=req.keywords or "",
        filters=filters,
        session_token=token,
        view_all_filters=req.viewAllFilters,
    )


def _target_label(search_type: SearchType) -> str:
    return "people" if search_type is SearchType.PEOPLE else "companies"


def _generate(req: GenerateUrlRequest, require_session: bool) -> GenerateUrlResponse:
    search = _to_search_request(req, require_session)
    url = build_search_url(search)
    suffix = " with session" if search.session_token else ""
    logger.info("search_url_generated", search_type=search.search_type.value, with_session=bool(suffix))
    return GenerateUrlResponse(
        url=url,
        searchType=search.search_type.value,
        sessionId=search.session_token.encoded if search.session_token else None,
        filters=[f.to_dict() for f in search.filters],
        queryString=build_query_string(search),
        message=f"Sales Navigator search URL generated{suffix} for {_target_label(search.search_type)}",
    )


# ------------------------------------------------------------
# 🔐 Session routes
# ------------------------------------------------------------
@app.post("/extract-session", response_model=ExtractSessionResponse)
def extract_session(req: ExtractSessionRequest):
    token = extract_session_token(req.url)
    return ExtractSessionResponse(
        sessionId=token.encoded,
        decodedSessionId=token.decoded,
        message="Session id extracted",
    )


@app.post("/generate-url-with-session", response_model=GenerateUrlResponse)
def generate_url_with_session(req: GenerateUrlRequest):
    return _generate(req, require_session=True)


# ------------------------------------------------------------
# 🔗 Search URL routes
# ------------------------------------------------------------
@app.post("/generate-url", response_model=GenerateUrlResponse)
def generate_url(req: GenerateUrlRequest):
    return _generate(req, require_session=False)


@app.post("/parse-url", response_model=ParseUrlResponse)
def parse_url(req: ParseUrlRequest):
    parsed = parse_search_url(req.url)
    token = parsed.session_token
    return ParseUrlResponse(
        searchType=parsed.search_type.value,
        keywords=parsed.keywords,
        filters=[f.to_dict() for f in parsed.filters],
        sessionId=token.encoded if token else None,
        decodedSessionId=token.decoded if token else None,
        viewAllFilters=parsed.view_all_filters,
        queryString=parsed.query_string,
        originalUrl=req.url,
    )


# ------------------------------------------------------------
# 🧮 Filters
# ------------------------------------------------------------
@app.get("/filter-types")
def filter_types():
    catalog = load_filter_catalog()
    body: Dict[str, Any] = {"success": True}
    for search_type, infos in catalog.items():
        body[search_type.value] = [
            {"type": i.type, "name": i.name, "description": i.description} for i in infos
        ]
    return body


@app.post("/validate-filters")
def validate_filters_endpoint(req: ValidateFiltersRequest):
    search_type = SearchType.parse(req.searchType)
    report = validate_filters(search_type, req.filters)
    return {
        "success": True,
        "valid": report.valid,
        "errors": [{"filter": i.filter, "message": i.message} for i in report.errors],
        "warnings": [{"filter": i.filter, "message": i.message} for i in report.warnings],
    }


# ------------------------------------------------------------
# 🧭 Health checks
# ------------------------------------------------------------
@app.get("/healthz")
def healthz():
    return {
        "ok": True,
        "env": settings.ENV,
        "debug": settings.DEBUG,
        "app": settings.APP_NAME,
        "token_codec": settings.TOKEN_CODEC,
    }


@app.get("/health")
def health():
    return {"status": "ok", "env": settings.ENV}


@app.get("/")
def hello():
    return {"message": f"{settings.APP_NAME} running."}
