from collections import namedtuple

from .errors import ContractViolation, ParseError, RemoteRejected


#---------------------------------------------------------------------------#
#   Response envelope                                                       #
#       Every ajax response reads {"error": bool, "message": str,           #
#       "body": ...}. "body" is always present when "error" is false, and   #
#       may be null, missing or "[]" when it is true.                       #
#---------------------------------------------------------------------------#


_envelope_fields = [
    "error",        #   bool
    "message",      #   str
    "body"          #   built body, None if absent
]
Envelope = namedtuple("Envelope", _envelope_fields)


def parse_envelope(content, make_body=None):
    """
    Check the envelope shape of a deserialized response.

    Args:
        content     dict
            Deserialized JSON response.
        make_body   callable
            Converts the raw body to its target type. Only applied when the
            envelope reports success and carries a body. None keeps the raw
            body.

    Returns:
        `Envelope`.

    Raises:
        ParseError
            Envelope fields are missing or of the wrong type, or
            `make_body` rejects the body.
    """
    if not isinstance(content, dict):
        raise ParseError(
            f"Expected a response envelope, got {type(content).__name__}"
        )
    error = content.get("error")
    message = content.get("message")
    if not isinstance(error, bool):
        raise ParseError("Envelope field 'error' is not a boolean")
    if not isinstance(message, str):
        raise ParseError("Envelope field 'message' is not a string")

    body = content.get("body")
    if not error and body is not None and make_body is not None:
        body = make_body(body)
    return Envelope(error, message, body)

def resolve(envelope):
    """
    Unwrap an envelope into its body.

    Raises:
        RemoteRejected
            The platform refused the request, carries its message verbatim.
        ContractViolation
            Success reported without a body.
    """
    if envelope.error:
        raise RemoteRejected(envelope.message)
    if envelope.body is None:
        raise ContractViolation("Envelope reports success but has no body")
    return envelope.body
