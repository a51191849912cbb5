#---------------------------------------------------------------------------#
#   Exceptions raised by pxvapi.                                            #
#       Everything a caller is expected to handle derives "PixivError".     #
#---------------------------------------------------------------------------#


class PixivError(Exception):
    """Base class of every recoverable pxvapi error."""


class TransportError(PixivError):
    """Network failure or non-success HTTP status."""


class ParseError(PixivError):
    """Response body does not match the expected JSON shape."""


class RemoteRejected(PixivError):
    """
    The envelope came back with "error" set.

    Attributes:
        message     string
            Platform message, kept verbatim.
    """

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class SessionError(PixivError):
    """A client could not be constructed from the given session."""


class InvalidCookie(SessionError):
    pass


class TokenNotFound(SessionError):
    pass


class ContractViolation(RuntimeError):
    """
    The platform broke its own envelope contract (success without body).

    Not a "PixivError" on purpose: it is a fault, not an outcome callers
    are meant to branch on.
    """
