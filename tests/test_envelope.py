import pytest

from pxvapi.envelope import Envelope, parse_envelope, resolve
from pxvapi.errors import (
    ContractViolation, ParseError, PixivError, RemoteRejected
)


@pytest.mark.parametrize("message", [
    "Not found",
    "",
    "  trailing space ",
    "該当作品は削除されたか、存在しない作品IDです。",
])
def test_error_envelope_keeps_message_verbatim(message):
    with pytest.raises(RemoteRejected) as excinfo:
        resolve(Envelope(True, message, None))
    assert excinfo.value.message == message
    assert str(excinfo.value) == message


def test_error_envelope_ignores_body():
    with pytest.raises(RemoteRejected):
        resolve(Envelope(True, "nope", {"id": "1"}))


@pytest.mark.parametrize("body", [
    {"id": "42", "title": "sunset"},
    [{"width": 1}, {"width": 2}],
    "text",
    0,
    False,
    [],
])
def test_success_envelope_returns_body_unchanged(body):
    assert resolve(Envelope(False, "", body)) is body


def test_success_without_body_is_a_fault():
    with pytest.raises(ContractViolation):
        resolve(Envelope(False, "", None))
    assert not issubclass(ContractViolation, PixivError)


def test_parse_envelope_converts_successful_body():
    content = {"error": False, "message": "", "body": {"n": "7"}}
    env = parse_envelope(content, lambda body: int(body["n"]))
    assert env == Envelope(False, "", 7)


def test_parse_envelope_without_converter_keeps_raw_body():
    content = {"error": False, "message": "", "body": {"n": "7"}}
    assert parse_envelope(content).body == {"n": "7"}


def test_parse_envelope_skips_converter_on_error():
    def explode(body):
        raise AssertionError("must not be called")

    content = {"error": True, "message": "Not found", "body": []}
    env = parse_envelope(content, explode)
    assert env.error is True
    assert env.message == "Not found"


def test_parse_envelope_missing_body():
    env = parse_envelope({"error": False, "message": ""}, lambda body: body)
    assert env.body is None
    with pytest.raises(ContractViolation):
        resolve(env)


def test_parse_envelope_propagates_body_errors():
    def reject(body):
        raise ParseError("bad body")

    with pytest.raises(ParseError, match="bad body"):
        parse_envelope({"error": False, "message": "", "body": {}}, reject)


@pytest.mark.parametrize("content", [
    [],
    "oops",
    {"message": "", "body": {}},
    {"error": 0, "message": "", "body": {}},
    {"error": "false", "message": "", "body": {}},
    {"error": False, "body": {}},
    {"error": False, "message": None, "body": {}},
])
def test_parse_envelope_rejects_malformed_envelopes(content):
    with pytest.raises(ParseError):
        parse_envelope(content)
