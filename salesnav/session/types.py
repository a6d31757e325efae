# Data models for the session URL codec.
# Plain dataclasses and enums; API bodies are converted into these at the
# boundary so the codec never sees loosely-typed dicts.

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional

from .codec import TokenCodec, get_codec
from .errors import InvalidFilterError, InvalidSearchTypeError


class SearchType(str, Enum):
    PEOPLE = "people"
    COMPANY = "company"

    @classmethod
    def parse(cls, value: Any) -> "SearchType":
        try:
            return cls(value)
        except ValueError:
            allowed = ", ".join(t.value for t in cls)
            raise InvalidSearchTypeError(
                f"Invalid search type {value!r}; expected one of: {allowed}"
            ) from None


class FilterType(str, Enum):
    CURRENT_COMPANY = "CURRENT_COMPANY"
    PAST_COMPANY = "PAST_COMPANY"
    COMPANY_HEADCOUNT = "COMPANY_HEADCOUNT"
    FUNCTION = "FUNCTION"
    CURRENT_TITLE = "CURRENT_TITLE"
    SENIORITY_LEVEL = "SENIORITY_LEVEL"
    REGION = "REGION"
    POSTAL_CODE = "POSTAL_CODE"
    INDUSTRY = "INDUSTRY"
    ANNUAL_REVENUE = "ANNUAL_REVENUE"
    COMPANY_HEADCOUNT_GROWTH = "COMPANY_HEADCOUNT_GROWTH"


class SelectionType(str, Enum):
    INCLUDED = "INCLUDED"
    EXCLUDED = "EXCLUDED"


@dataclass(frozen=True)
class SessionToken:
    """A session identifier in its URL-embedded and human-readable forms."""
    encoded: str
    decoded: str

    @classmethod
    def from_encoded(cls, encoded: str, codec: Optional[TokenCodec] = None) -> "SessionToken":
        """
        Decode `encoded` and keep its canonical re-encoding, so lowercase hex
        or needlessly escaped characters all map to one token.
        """
        codec = codec or get_codec()
        decoded = codec.decode(encoded)
        return cls(encoded=codec.encode(decoded), decoded=decoded)

    @classmethod
    def from_value(cls, value: str, codec: Optional[TokenCodec] = None) -> "SessionToken":
        """
        Build a token from user input in either form.
        Input that already is a well-formed encoding is decoded first, so a
        value copied out of a URL is not encoded a second time.
        """
        codec = codec or get_codec()
        if codec.looks_encoded(value):
            return cls.from_encoded(value, codec)
        encoded = codec.encode(value)
        # validates codec-specific constraints on the decoded form
        return cls(encoded=encoded, decoded=codec.decode(encoded))

    def __str__(self) -> str:
        return self.encoded


@dataclass(frozen=True)
class FilterValue:
    text: str
    id: Optional[str] = None
    selection_type: SelectionType = SelectionType.INCLUDED

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {}
        if self.id is not None:
            out["id"] = self.id
        out["text"] = self.text
        out["selectionType"] = self.selection_type.value
        return out


@dataclass(frozen=True)
class SearchFilter:
    type: FilterType
    values: List[FilterValue] = field(default_factory=list)

    @classmethod
    def from_dict(cls, raw: Dict[str, Any]) -> "SearchFilter":
        """Validate a raw `{type, values: [{id, text, selectionType}]}` mapping."""
        if not isinstance(raw, dict):
            raise InvalidFilterError(f"Filter must be an object, got {type(raw).__name__}")
        ftype = raw.get("type")
        try:
            filter_type = FilterType(ftype)
        except ValueError:
            raise InvalidFilterError(f"Unknown filter type {ftype!r}") from None

        raw_values = raw.get("values")
        if not isinstance(raw_values, list) or not raw_values:
            raise InvalidFilterError(f"Filter {filter_type.value} must contain at least one value")

        values: List[FilterValue] = []
        for i, rv in enumerate(raw_values):
            if not isinstance(rv, dict):
                raise InvalidFilterError(f"{filter_type.value}[{i}] must be an object")
            text = rv.get("text")
            if not isinstance(text, str) or not text:
                raise InvalidFilterError(f"{filter_type.value}[{i}] requires a non-empty text")
            sel = rv.get("selectionType")
            if sel is None:
                sel = SelectionType.INCLUDED.value
            try:
                selection = SelectionType(sel)
            except ValueError:
                raise InvalidFilterError(
                    f"{filter_type.value}[{i}] has invalid selectionType {sel!r}"
                ) from None
            value_id = rv.get("id")
            values.append(
                FilterValue(
                    text=text,
                    id=str(value_id) if value_id not in (None, "") else None,
                    selection_type=selection,
                )
            )
        return cls(type=filter_type, values=values)

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type.value, "values": [v.to_dict() for v in self.values]}


@dataclass(frozen=True)
class SearchRequest:
    """Structured input used to (re)generate a search URL."""
    search_type: SearchType
    keywords: str = ""
    filters: List[SearchFilter] = field(default_factory=list)
    session_token: Optional[SessionToken] = None
    view_all_filters: bool = False


@dataclass(frozen=True)
class ParsedSearchUrl:
    """What `parse_search_url` recovers from a full search URL."""
    search_type: SearchType
    keywords: Optional[str]
    filters: List[SearchFilter]
    session_token: Optional[SessionToken]
    view_all_filters: bool
    query_string: Optional[str]
