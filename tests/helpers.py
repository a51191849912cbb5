"""Payload samples and a local stand-in for the pixiv web server."""

import contextlib

from aiohttp import web
from aiohttp.test_utils import TestServer

SESSION_ID = "12345_AbCdEfGhIjKlMnOpQrStUvWxYz"
HOME_HTML = (
    '<html><head><meta name="global-data" id="meta-global-data" '
    'content=\'{"token":"abc123","services":{}}\'></head></html>'
)


def envelope(body, *, error=False, message=""):
    return {"error": error, "message": message, "body": body}


def illust_payload(**overrides):
    payload = {
        "id": "42",
        "title": "sunset",
        "description": "<p>drawn on a train</p>",
        "illustType": 0,
        "xRestrict": 0,
        "userId": "11",
        "userName": "kio",
        "width": 1000,
        "height": 1414,
        "pageCount": 2,
        "bookmarkCount": 120,
        "tags": {"authorId": "11", "tags": []},
    }
    payload.update(overrides)
    return payload


def illust_profile_payload(illust_id, **overrides):
    payload = {
        "id": str(illust_id),
        "title": f"work {illust_id}",
        "description": "",
        "illustType": 0,
        "xRestrict": 0,
        "url": (
            "https://i.pximg.net/c/250x250_80_a2/img-master/img/"
            f"2023/06/01/00/00/00/{illust_id}_p0_square1200.jpg"
        ),
        "tags": ["original", "landscape"],
        "userId": "11",
        "userName": "kio",
        "width": 800,
        "height": 600,
        "pageCount": 1,
        "profileImageUrl": "https://i.pximg.net/user-profile/img/11_50.jpg",
    }
    payload.update(overrides)
    return payload


def user_payload(**overrides):
    payload = {
        "userId": "11",
        "name": "kio",
        "image": "https://i.pximg.net/user-profile/img/11_50.jpg",
        "imageBig": "https://i.pximg.net/user-profile/img/11_170.jpg",
        "premium": False,
        "isFollowed": True,
        "isMypixiv": False,
        "isBlocking": False,
        "background": None,
        "comment": "hello",
        "commentHtml": "<strong>hello</strong>",
        "followedBack": False,
        "acceptRequest": True,
        "following": 37,
        "webpage": None,
        "official": False,
    }
    payload.update(overrides)
    return payload


def page_payload(page):
    base = "https://i.pximg.net/img-{kind}/img/2023/06/01/00/00/00/42_p{page}"
    return {
        "urls": {
            "thumb_mini": base.format(kind="master", page=page) + "_128.jpg",
            "small": base.format(kind="master", page=page) + "_540.jpg",
            "regular": base.format(kind="master", page=page) + "_1200.jpg",
            "original": base.format(kind="original", page=page) + ".png",
        },
        "width": 1000,
        "height": 1414,
    }


def pixiv_app(routes=None, *, home_html=HOME_HTML, userid=None, seen=None):
    """
    Build an app answering the home page plus `routes`.

    `routes` maps a path to either a dict (served as JSON) or an aiohttp
    handler. Requests are appended to `seen` when given.
    """

    @web.middleware
    async def record(request, handler):
        if seen is not None:
            seen.append(request)
        return await handler(request)

    async def home(request):
        headers = {}
        if userid is not None:
            headers["x-userid"] = userid
        return web.Response(
            text=home_html, content_type="text/html", headers=headers
        )

    app = web.Application(middlewares=[record])
    app.router.add_get("/", home)
    for path, reply in (routes or {}).items():
        app.router.add_get(path, _as_handler(reply))
    return app


def _as_handler(reply):
    if callable(reply):
        return reply

    async def handler(request):
        return web.json_response(reply)
    return handler


@contextlib.asynccontextmanager
async def serve(app, host="127.0.0.1"):
    """Run `app` on a local port and yield its base URL."""
    server = TestServer(app, host=host)
    await server.start_server()
    try:
        yield f"{server.scheme}://{server.host}:{server.port}"
    finally:
        await server.close()
