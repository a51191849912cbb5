"""Typed asynchronous client of pixiv's web ajax API."""

from .client import BASE_URL, USER_AGENT, PixivClient, byte2human
from .de import dict_keys_to_list, dict_values_to_list
from .envelope import Envelope, parse_envelope, resolve
from .errors import (
    ContractViolation, InvalidCookie, ParseError, PixivError, RemoteRejected,
    SessionError, TokenNotFound, TransportError
)
from .log import enable_console_logging, enable_file_logging, pxlog
from .types import (
    IllustImage, IllustImageUrls, IllustInfo, IllustProfile, IllustType,
    Restriction, UserAllWorks, UserInfo, UserProfile, UserTopWorks
)

__version__ = "0.1.0"
