"""
Response decoder.

Classifies raw response bodies by their structure rather than by HTTP status:

- token endpoint: `AccessTokenGrant` | `ProviderError` | `Unrecognized`
- resource endpoints: typed resource, or a flat string map on failure

Providers may return error payloads inside a 2xx envelope, so the token body is
matched against both known shapes in a single union validation.
"""

from dataclasses import dataclass
from typing import Annotated, Dict, Type, TypeVar, Union

from pydantic import Field, TypeAdapter, ValidationError

from identity_gate.common.exceptions import DecodeError
from identity_gate.core.oauth.models import AccessTokenGrant, ProviderError

T = TypeVar("T")


@dataclass(frozen=True)
class Unrecognized:
    """Token endpoint body that matched neither known shape."""

    body: str
    reason: str = ""


TokenResponse = Union[AccessTokenGrant, ProviderError, Unrecognized]

# left_to_right: a body carrying both shapes is treated as a grant
_TOKEN_BODY: TypeAdapter[Union[AccessTokenGrant, ProviderError]] = TypeAdapter(
    Annotated[Union[AccessTokenGrant, ProviderError], Field(union_mode="left_to_right")]
)
_API_ERROR_BODY: TypeAdapter[Dict[str, str]] = TypeAdapter(Dict[str, str])

_adapters: Dict[object, TypeAdapter] = {}


def _text(body: Union[str, bytes]) -> str:
    if isinstance(body, bytes):
        return body.decode("utf-8", errors="replace")
    return body


def _adapter_for(target: object) -> TypeAdapter:
    adapter = _adapters.get(target)
    if adapter is None:
        adapter = TypeAdapter(target)
        _adapters[target] = adapter
    return adapter


def decode_token_response(body: Union[str, bytes]) -> TokenResponse:
    """
    Decode a token endpoint body into one of the three token response variants.

    Never raises for bodies of the wrong shape; those come back as `Unrecognized`.
    """
    try:
        return _TOKEN_BODY.validate_json(body)
    except ValidationError as e:
        return Unrecognized(body=_text(body), reason=f"{e.error_count()} validation errors")


def decode_resource(body: Union[str, bytes], target: Type[T]) -> T:
    """
    Decode a successful resource body into `target`.

    Raises:
        DecodeError: body is not valid JSON or does not fit `target`
    """
    try:
        return _adapter_for(target).validate_json(body)
    except ValidationError as e:
        raise DecodeError(_text(body), expected=_type_name(target)) from e


def decode_api_error(body: Union[str, bytes]) -> Dict[str, str]:
    """
    Decode a resource endpoint error body as an open string map.

    Raises:
        DecodeError: body is not a flat JSON object of strings
    """
    try:
        return _API_ERROR_BODY.validate_json(body)
    except ValidationError as e:
        raise DecodeError(_text(body), expected="API error") from e


def _type_name(target: object) -> str:
    return getattr(target, "__name__", None) or str(target)
