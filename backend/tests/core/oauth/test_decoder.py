"""Tests for response body classification."""

from typing import List

import pytest

from identity_gate.common.exceptions import DecodeError
from identity_gate.core.oauth.decoder import (
    Unrecognized,
    decode_api_error,
    decode_resource,
    decode_token_response,
)
from identity_gate.core.oauth.models import AccessTokenGrant, Email, ProviderError, User


class TestDecodeTokenResponse:
    def test_grant_shape(self):
        decoded = decode_token_response(b'{"access_token":"abc","scope":"user:email","token_type":"bearer"}')

        assert decoded == AccessTokenGrant(access_token="abc", scope="user:email", token_type="bearer")

    def test_error_shape(self):
        decoded = decode_token_response(
            '{"error":"incorrect_client_credentials","error_description":"The client_id and/or '
            'client_secret passed are incorrect.","error_uri":"https://docs.github.com/apps"}'
        )

        assert isinstance(decoded, ProviderError)
        assert decoded.error == "incorrect_client_credentials"
        assert decoded.error_uri == "https://docs.github.com/apps"

    def test_grant_wins_when_both_shapes_present(self):
        decoded = decode_token_response(
            b'{"access_token":"abc","scope":"user:email","token_type":"bearer",'
            b'"error":"x","error_description":"y","error_uri":"z"}'
        )

        assert isinstance(decoded, AccessTokenGrant)

    def test_extra_fields_are_ignored(self):
        decoded = decode_token_response(
            b'{"access_token":"abc","scope":"user:email","token_type":"bearer","refresh_token":"r"}'
        )

        assert isinstance(decoded, AccessTokenGrant)
        assert decoded.access_token == "abc"

    @pytest.mark.parametrize("body", [b"", b"{", b"null", b'"abc"', b"{}", b'{"scope":"user:email"}'])
    def test_unrecognized(self, body):
        decoded = decode_token_response(body)

        assert isinstance(decoded, Unrecognized)
        assert decoded.body == body.decode()


class TestDecodeResource:
    def test_email_list(self):
        emails = decode_resource(b'[{"email":"a@b.c","primary":true,"verified":false}]', List[Email])

        assert emails == [Email(email="a@b.c", primary=True, verified=False)]

    def test_wrong_type_raises_decode_error(self):
        with pytest.raises(DecodeError) as exc_info:
            decode_resource(b'{"login": 5, "id": "x"}', User)

        assert exc_info.value.expected == "User"
        assert exc_info.value.body == '{"login": 5, "id": "x"}'

    def test_long_body_is_truncated_in_message(self):
        body = "x" * 1000

        with pytest.raises(DecodeError) as exc_info:
            decode_resource(body, User)

        assert len(str(exc_info.value)) < 400
        assert exc_info.value.body == body


class TestDecodeApiError:
    def test_flat_map(self):
        assert decode_api_error(b'{"message":"Not Found"}') == {"message": "Not Found"}

    def test_empty_map(self):
        assert decode_api_error(b"{}") == {}

    @pytest.mark.parametrize(
        "body",
        [b"", b"Not Found", b"[]", b'{"message":"Validation Failed","errors":[{"code":"missing"}]}'],
    )
    def test_non_string_map_raises_decode_error(self, body):
        with pytest.raises(DecodeError):
            decode_api_error(body)
