import asyncio
from collections import namedtuple

import aiohttp
import requests

from .const import CHUNK_SIZE, HTTP_TIMEOUT, MAX_BODY_SIZE
from .errors import TransportError
from .util import _getLogger


HttpResponse = namedtuple("HttpResponse", ["status", "raw_headers", "body"])
HttpResponse.__doc__ = """
A complete HTTP response. `raw_headers` is the list of (name, value) pairs in
the order they were received, with repeated headers kept as separate entries.
"""


class Transport(object):
    """
    Synchronous HTTP POST using requests. HTTP error statuses are not raised:
    the first response of an action call is usually a 401 carrying the digest
    challenge.
    """

    def __init__(self, timeout=HTTP_TIMEOUT, verify=True, max_body_size=MAX_BODY_SIZE):
        self.timeout = timeout
        self.verify = verify
        self.max_body_size = max_body_size
        self._log = _getLogger("Transport")

    def _check_size(self, body, url):
        if len(body) > self.max_body_size:
            raise TransportError(
                "Response from %s exceeds %d bytes" % (url, self.max_body_size)
            )

    def send_post(self, request):
        self._log.debug(">> POST %s (%d bytes)", request.url, len(request.body))
        # http.client would encode str values as latin-1; send UTF-8 like aiohttp.
        headers = dict(
            (name, value.encode("utf-8")) for name, value in request.headers.items()
        )
        try:
            resp = requests.post(
                request.url,
                data=request.body,
                headers=headers,
                timeout=self.timeout,
                verify=self.verify,
                stream=True,
            )
        except requests.exceptions.RequestException as exc:
            raise TransportError("POST to %s failed: %s" % (request.url, exc))
        except (UnicodeError, ValueError) as exc:
            raise TransportError("Can't send request to %s: %s" % (request.url, exc))

        try:
            # The urllib3 header container keeps repeated headers apart,
            # unlike resp.headers.
            raw_headers = list(resp.raw.headers.iteritems())
            body = bytearray()
            for chunk in resp.iter_content(chunk_size=CHUNK_SIZE):
                body.extend(chunk)
                self._check_size(body, request.url)
        except requests.exceptions.RequestException as exc:
            raise TransportError("Reading response from %s failed: %s" % (request.url, exc))
        finally:
            resp.close()

        self._log.debug("<< %s %s (%d bytes)", resp.status_code, request.url, len(body))
        return HttpResponse(resp.status_code, raw_headers, bytes(body))


class AsyncTransport(Transport):
    """
    Asynchronous HTTP POST using aiohttp. Uses `session` if given, otherwise a
    short-lived session per request.
    """

    def __init__(
        self,
        session=None,
        timeout=HTTP_TIMEOUT,
        verify=True,
        max_body_size=MAX_BODY_SIZE,
    ):
        super(AsyncTransport, self).__init__(
            timeout=timeout, verify=verify, max_body_size=max_body_size
        )
        self.session = session

    async def send_post(self, request):
        if self.session is not None:
            return await self._post(self.session, request)
        async with aiohttp.ClientSession() as session:
            return await self._post(session, request)

    async def _post(self, session, request):
        self._log.debug(">> POST %s (%d bytes)", request.url, len(request.body))
        kwargs = dict(
            data=request.body,
            headers=request.headers,
            timeout=aiohttp.ClientTimeout(total=self.timeout),
        )
        if not self.verify:
            kwargs["ssl"] = False
        try:
            async with session.post(request.url, **kwargs) as resp:
                raw_headers = [
                    (name.decode("latin-1"), value.decode("latin-1"))
                    for name, value in resp.raw_headers
                ]
                body = bytearray()
                async for chunk in resp.content.iter_chunked(CHUNK_SIZE):
                    body.extend(chunk)
                    self._check_size(body, request.url)
                status = resp.status
        except (aiohttp.ClientError, asyncio.TimeoutError) as exc:
            raise TransportError("POST to %s failed: %r" % (request.url, exc))

        self._log.debug("<< %s %s (%d bytes)", status, request.url, len(body))
        return HttpResponse(status, raw_headers, bytes(body))
