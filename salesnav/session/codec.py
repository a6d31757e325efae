# Transport encodings for session tokens.
# Sales Navigator embeds the token percent-encoded the way a browser's
# encodeURIComponent does; the base64 variant additionally checks that the
# decoded token is a padded base64 value, which is what live tokens look like.

from __future__ import annotations

import base64
import binascii
import re
from typing import Dict, Optional, Type
from urllib.parse import quote, unquote

from .errors import DecodeError

# Characters encodeURIComponent leaves alone, on top of quote()'s always-safe set.
URI_COMPONENT_SAFE = "!~*'()"

_ENCODED_FORM = re.compile(r"^(?:[A-Za-z0-9\-_.!~*'()]|%[0-9A-Fa-f]{2})+$")
_BAD_ESCAPE = re.compile(r"%(?![0-9A-Fa-f]{2})")
# Characters that would end or split a query value.
_BREAKS_QUERY_VALUE = re.compile(r"[&#\s]")


def encode_uri_component(value: str) -> str:
    return quote(value, safe=URI_COMPONENT_SAFE)


class TokenCodec:
    """Base strategy: subclasses define how a token travels inside a URL."""
    name = "base"

    def encode(self, decoded: str) -> str:
        raise NotImplementedError

    def decode(self, encoded: str) -> str:
        raise NotImplementedError

    def looks_encoded(self, value: str) -> bool:
        raise NotImplementedError

    def embeddable(self, encoded: str) -> bool:
        """Whether `encoded` can sit verbatim as a query value."""
        return bool(encoded) and not _BREAKS_QUERY_VALUE.search(encoded) and not _BAD_ESCAPE.search(encoded)


class PercentTokenCodec(TokenCodec):
    name = "percent"

    def encode(self, decoded: str) -> str:
        if not decoded:
            raise DecodeError("Session token is empty")
        return encode_uri_component(decoded)

    def decode(self, encoded: str) -> str:
        if not encoded:
            raise DecodeError("Session token is empty")
        bad = _BAD_ESCAPE.search(encoded)
        if bad:
            raise DecodeError(f"Malformed percent-escape at position {bad.start()}")
        try:
            return unquote(encoded, encoding="utf-8", errors="strict")
        except UnicodeDecodeError as e:
            raise DecodeError(f"Session token is not valid UTF-8 once decoded: {e.reason}") from e

    def looks_encoded(self, value: str) -> bool:
        return bool(_ENCODED_FORM.match(value))


class Base64TokenCodec(PercentTokenCodec):
    name = "base64"

    def decode(self, encoded: str) -> str:
        decoded = super().decode(encoded)
        try:
            base64.b64decode(decoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise DecodeError(f"Session token is not valid base64: {e}") from e
        return decoded


_CODECS: Dict[str, Type[TokenCodec]] = {
    PercentTokenCodec.name: PercentTokenCodec,
    Base64TokenCodec.name: Base64TokenCodec,
}


def get_codec(name: Optional[str] = None) -> TokenCodec:
    """Resolve a codec by name; defaults to the configured TOKEN_CODEC."""
    if name is None:
        from salesnav.settings import settings
        name = settings.TOKEN_CODEC
    try:
        return _CODECS[name]()
    except KeyError:
        raise ValueError(f"Unknown token codec {name!r}; expected one of: {', '.join(_CODECS)}") from None
