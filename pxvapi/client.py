import asyncio
import json
import os
import re
import time

import aiohttp

from .de import parse_int32
from .envelope import parse_envelope, resolve
from .errors import InvalidCookie, ParseError, TokenNotFound, TransportError
from .log import pxlog
from .types import (
    make_illust_info, make_illust_pages, make_user_all_works,
    make_user_info, make_user_top_works
)


#---------------------------------------------------------------------------#
#   pxvapi                                                                  #
#       Asynchronous client of pixiv's web ajax API.                        #
#       Login on python is not supported, bring the PHPSESSID cookie of a   #
#       logged-in browser session.                                          #
#---------------------------------------------------------------------------#

#---------------------------------------------------------------------------#
#   Constants                                                               #
#---------------------------------------------------------------------------#


BASE_URL = "https://www.pixiv.net"
USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/114.0.0.0 Safari/537.36"
)

HOME_PATH = "/"
USER_INFO_template = "/ajax/user/{user_id:d}?full=1"
USER_TOP_WORKS_template = "/ajax/user/{user_id:d}/profile/top"
USER_ALL_WORKS_template = "/ajax/user/{user_id:d}/profile/all"
ILLUST_INFO_template = "/ajax/illust/{illust_id:d}"
ILLUST_PAGES_template = "/ajax/illust/{illust_id:d}/pages"

USERID_HEADER = "x-userid"

_pat_csrf_token = re.compile(r'token":"([^"]+)')

#   Errors aiohttp may raise while a request is in flight.
_TRANSPORT_ERRORS = (aiohttp.ClientError, asyncio.TimeoutError)


#---------------------------------------------------------------------------#
#   Client                                                                  #
#---------------------------------------------------------------------------#


class PixivClient:
    """
    Authenticated pixiv session.

    Build one with `await PixivClient.create(session_id)`; the constructor
    expects an already validated session and token. Every request method is
    independent, a client may serve concurrent calls.
    """

    def __init__(self, session, csrf_token, auth_headers, base_url=BASE_URL):
        self._session = session
        self._csrf_token = csrf_token
        #   Sent to base_url only, never to image hosts.
        self._auth_headers = auth_headers
        self._base_url = base_url

    @classmethod
    async def create(cls, session_id, *, base_url=BASE_URL):
        """
        Open a session and check that it is logged in.

        Args:
            session_id  string
                Value of the PHPSESSID cookie of a logged-in web session.
            base_url    string
                Origin requests are sent to, also used as referer.

        Returns:
            `PixivClient`.

        Raises:
            InvalidCookie
                `session_id` can't be sent as a header value.
            TokenNotFound
                The home page carries no CSRF token, the session is most
                likely invalid.
            TransportError
                The home page could not be fetched.
        """
        auth_headers = _make_auth_headers(session_id)
        session = aiohttp.ClientSession(
            headers={"Referer": base_url, "User-Agent": USER_AGENT},
            cookie_jar=aiohttp.DummyCookieJar(),
            raise_for_status=True
        )
        try:
            csrf_token = await _fetch_csrf_token(
                session, base_url, auth_headers
            )
        except BaseException:
            await session.close()
            raise
        pxlog.debug("Session established")
        return cls(session, csrf_token, auth_headers, base_url)

    @property
    def csrf_token(self):
        #   Not sent by any read request, kept for state-changing ones.
        return self._csrf_token

    @property
    def closed(self):
        return self._session.closed

    async def close(self):
        await self._session.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    #-----------------------------------------------------------------------#
    #   Exposed APIs                                                        #
    #-----------------------------------------------------------------------#

    async def self_user_id(self):
        """
        Get the user ID of the logged-in user.

        Returns:
            int, or None if the platform did not report one (e.g. the
            session is not logged in).

        Raises:
            TransportError
        """
        url = self._base_url + HOME_PATH
        pxlog.debug(f"GET {HOME_PATH} ({USERID_HEADER})")
        try:
            async with self._session.get(
                url, headers=self._auth_headers
            ) as resp:
                value = resp.headers.get(USERID_HEADER)
        except _TRANSPORT_ERRORS as e:
            raise TransportError(f"GET {HOME_PATH} failed: {e}") from e
        return parse_int32(value)

    async def user_info(self, user_id):
        """Get the full profile of a user, as `UserInfo`."""
        path = USER_INFO_template.format(user_id=user_id)
        return await self._common_get(path, make_user_info)

    async def user_top_works(self, user_id):
        """
        Get the works shown on a user's profile page.

        Returns:
            `UserTopWorks`, a bounded preview of illusts and mangas.
        """
        path = USER_TOP_WORKS_template.format(user_id=user_id)
        return await self._common_get(path, make_user_top_works)

    async def user_all_works(self, user_id):
        """
        Get the IDs of every work of a user.

        Returns:
            `UserAllWorks`, holding lists of int.
        """
        path = USER_ALL_WORKS_template.format(user_id=user_id)
        return await self._common_get(path, make_user_all_works)

    async def illust_info(self, illust_id):
        """Get the metadata of an illust, as `IllustInfo`."""
        path = ILLUST_INFO_template.format(illust_id=illust_id)
        return await self._common_get(path, make_illust_info)

    async def illust_pages(self, illust_id):
        """
        Get the images of every page of an illust.

        Returns:
            list of `IllustImage`, in page order.
        """
        path = ILLUST_PAGES_template.format(illust_id=illust_id)
        return await self._common_get(path, make_illust_pages)

    async def download_image(self, url, path, chunk_size=4096):
        """
        Download an image, e.g. `IllustImageUrls.original`.

        Args:
            url         string
                Image URL; pximg.net only serves requests carrying the
                pixiv referer, which this session sends. The session
                cookie is not sent.
            path        string
                Destination file, parent directories are created.
            chunk_size  int
                Bytes read per chunk.

        Returns:
            int, bytes written.

        Raises:
            TransportError
                A partially written file is removed.
        """
        dirname = os.path.dirname(path)
        if dirname and not os.path.exists(dirname):
            os.makedirs(dirname)

        start = time.perf_counter()
        try:
            async with self._session.get(url) as resp:
                size = await _write_stream(resp, path, chunk_size)
        except _TRANSPORT_ERRORS as e:
            raise TransportError(f"Download {url} failed: {e}") from e
        elapsed = time.perf_counter() - start
        pxlog.info(
            "{file:14s} {size:10s} {elapsed:>4.1f} s".format(
                file=os.path.basename(path), size=byte2human(size),
                elapsed=elapsed
            )
        )
        return size

    #-----------------------------------------------------------------------#
    #   Procedures                                                          #
    #-----------------------------------------------------------------------#

    async def _common_get(self, path, make_body):
        url = self._base_url + path
        pxlog.debug(f"GET {path}")
        try:
            async with self._session.get(
                url, headers=self._auth_headers
            ) as resp:
                raw = await resp.read()
        except _TRANSPORT_ERRORS as e:
            raise TransportError(f"GET {path} failed: {e}") from e

        try:
            content = json.loads(raw)
        except ValueError as e:
            raise ParseError(f"GET {path}: body is not JSON: {e}") from e
        return resolve(parse_envelope(content, make_body))


#---------------------------------------------------------------------------#
#   Helpers                                                                 #
#---------------------------------------------------------------------------#


def _make_auth_headers(session_id):
    if not isinstance(session_id, str) or not session_id:
        raise InvalidCookie("Session ID must be a non-empty string")
    cookie = f"PHPSESSID={session_id}"
    if any(_is_invalid_header_char(c) for c in cookie):
        raise InvalidCookie("Cookie data seems to be invalid")
    return {"Cookie": cookie}

def _is_invalid_header_char(c):
    #   Visible Latin-1 only, so the header encodes the same on every
    #   aiohttp writer. Real PHPSESSID values are ASCII.
    code = ord(c)
    return (code < 0x20 and c != "\t") or code == 0x7f or code > 0xff

async def _fetch_csrf_token(session, base_url, auth_headers):
    pxlog.debug(f"GET {HOME_PATH} (CSRF token)")
    try:
        async with session.get(
            base_url + HOME_PATH, headers=auth_headers
        ) as resp:
            text = await resp.text(errors="replace")
    except _TRANSPORT_ERRORS as e:
        raise TransportError(f"GET {HOME_PATH} failed: {e}") from e
    match = _pat_csrf_token.search(text)
    if match is None:
        raise TokenNotFound("No CSRF token found")
    return match.group(1)

async def _write_stream(resp, fpath, chunk_size=4096):
    n = 0
    reader = resp.content
    with open(fpath, "wb") as f:
        try:
            async for chunk in reader.iter_chunked(chunk_size):
                n += f.write(chunk)
        except BaseException:
            #   Clean up incomplete file.
            f.close()
            os.remove(fpath)
            raise
    return n

_UNITS = ["", "K", "M", "G", "T", "P", "E", "Z", "Y"]

def byte2human(b):
    """Render a byte count with a binary unit, e.g. '   2.000 KB'."""
    size = float(b)
    mag = 0
    while size >= 1024 and mag < len(_UNITS) - 1:
        size /= 1024
        mag += 1
    return f"{size:8.3f} {_UNITS[mag]}B"
