from collections import namedtuple

from .const import HTTP_METHOD, HTTP_TIMEOUT, TR064_PORT, TR064_TLS_PORT
from .digest import (
    DigestAuthContext,
    build_authorization_header,
    compute_response,
    find_challenge,
    parse_challenge,
    validate_challenge,
)
from .errors import ExtractionError, TR064Error
from .extract import extract
from .soap import SoapRequest, parse_fault
from .transport import AsyncTransport, Transport
from .util import _getLogger


class Credentials(namedtuple("Credentials", ["username", "password"])):
    __slots__ = ()

    def __repr__(self):
        return "Credentials(username=%r, password=***)" % (self.username,)


ConnectionTarget = namedtuple("ConnectionTarget", ["host", "port", "scheme"])
ConnectionTarget.__new__.__defaults__ = (TR064_PORT, "http")

ResultField = namedtuple("ResultField", ["name", "tag", "type"])
ResultField.__new__.__defaults__ = ("string",)

ActionSpec = namedtuple(
    "ActionSpec",
    ["event_sub_url", "service_type", "action_name", "arguments_xml", "result_fields"],
)
ActionSpec.__new__.__defaults__ = ("", ())
ActionSpec.__doc__ = """
What to invoke on the device. `event_sub_url` is the control path the request
is posted to, `arguments_xml` the pre-rendered argument elements and
`result_fields` the `ResultField`s to pull out of the response.
"""


class CallResult(namedtuple("CallResult", ["data", "error"])):
    """
    Outcome of one action call: either `data` (the extracted fields) or
    `error` (a `TR064Error`) is set, never both.
    """

    __slots__ = ()

    @classmethod
    def success(cls, data):
        return cls(data, None)

    @classmethod
    def failure(cls, error):
        return cls(None, error)

    @property
    def ok(self):
        return self.error is None

    @property
    def kind(self):
        return None if self.error is None else self.error.kind


class Handshake(object):
    """
    Drives a single action call through the digest handshake:

    1. POST the envelope without credentials.
    2. If the response carries no "Digest realm" challenge the session is
       already authenticated and the body is the result.
    3. Otherwise answer the challenge and POST the same envelope again with an
       `Authorization` header. That response's body is the result.

    Every request is a fresh `SoapRequest`, so nothing of one call (least of
    all its `Authorization` header) can leak into another. A handshake can only
    be run once.
    """

    IDLE = "idle"
    AWAITING_FIRST_RESPONSE = "awaiting_first_response"
    AWAITING_SECOND_RESPONSE = "awaiting_second_response"
    DONE = "done"

    def __init__(self, action_spec, credentials, target, transport=None, auth_context=None):
        self.action_spec = action_spec
        self.credentials = credentials
        self.target = target
        self.transport = transport or Transport()
        self.auth_context = auth_context
        self.state = self.IDLE
        self._log = _getLogger("Handshake")

    def __repr__(self):
        return "<Handshake '%s' %s>" % (self.action_spec.action_name, self.state)

    def _first_request(self):
        if self.state != self.IDLE:
            raise RuntimeError("%r has already been run" % self)
        request = SoapRequest.create(self.action_spec, self.target)
        self._log.debug(">> %s %s", self.action_spec.action_name, request.url)
        self.state = self.AWAITING_FIRST_RESPONSE
        return request

    def _second_request(self, request, response):
        """
        Return the authenticated repeat of `request`, or None if `response`
        didn't challenge us.
        """
        header = find_challenge(response.raw_headers)
        if header is None:
            self._log.debug(
                "%s: no digest challenge, using first response",
                self.action_spec.action_name,
            )
            return None

        challenge = validate_challenge(parse_challenge(header))
        auth_context = self.auth_context or DigestAuthContext.create()
        digest = compute_response(
            self.credentials, challenge, HTTP_METHOD, request.path, auth_context
        )
        self._log.debug(
            "%s: answering digest challenge for realm %r",
            self.action_spec.action_name,
            challenge["realm"],
        )
        self.state = self.AWAITING_SECOND_RESPONSE
        return request.with_headers(
            Authorization=build_authorization_header(
                self.credentials, challenge, request.path, auth_context, digest
            )
        )

    def _extract(self, response):
        text = response.body.decode("utf-8", "replace")
        try:
            return extract(text, self.action_spec.result_fields)
        except ExtractionError as exc:
            fault = parse_fault(text)
            if fault is not None:
                raise fault
            if response.status >= 400:
                raise ExtractionError("%s (HTTP status %s)" % (exc, response.status))
            raise

    def _done(self, data=None, error=None):
        self.state = self.DONE
        if error is not None:
            self._log.warning(
                "%s failed (%s): %s", self.action_spec.action_name, error.kind, error
            )
            return CallResult.failure(error)
        self._log.debug("<< %s: %s", self.action_spec.action_name, data)
        return CallResult.success(data)

    def __call__(self):
        request = self._first_request()
        try:
            response = self.transport.send_post(request)
            authenticated = self._second_request(request, response)
            if authenticated is not None:
                response = self.transport.send_post(authenticated)
            data = self._extract(response)
        except TR064Error as exc:
            return self._done(error=exc)
        return self._done(data)


class AsyncHandshake(Handshake):
    def __init__(self, action_spec, credentials, target, transport=None, auth_context=None):
        super(AsyncHandshake, self).__init__(
            action_spec,
            credentials,
            target,
            transport=transport or AsyncTransport(),
            auth_context=auth_context,
        )

    async def __call__(self):
        request = self._first_request()
        try:
            response = await self.transport.send_post(request)
            authenticated = self._second_request(request, response)
            if authenticated is not None:
                response = await self.transport.send_post(authenticated)
            data = self._extract(response)
        except TR064Error as exc:
            return self._done(error=exc)
        return self._done(data)


def call_action(action_spec, credentials, target, transport=None, auth_context=None):
    """
    Invoke `action_spec` on `target` and return a `CallResult`. Transport,
    protocol and extraction problems are reported through the result, not
    raised.
    """
    return Handshake(
        action_spec, credentials, target, transport=transport, auth_context=auth_context
    )()


async def async_call_action(
    action_spec, credentials, target, transport=None, auth_context=None
):
    """
    Asynchronous version of `call_action()`.
    """
    return await AsyncHandshake(
        action_spec, credentials, target, transport=transport, auth_context=auth_context
    )()


class Device(object):
    """
    A TR-064 device at a fixed address with default credentials.

    Calling the device runs one independent handshake per call. Credentials
    given to the call take precedence over the device's. Without a port the
    device is reached on 49000, or 49443 when `scheme` is "https".

    >>> box = Device('192.168.178.1', username='smarthome', password='secret')
    >>> result = box(homeauto.get_generic_device_infos(0))
    >>> result.data
    {'power': 1520, 'energy': 4330, 'temperature': 215, 'switch_state': 1}
    """

    def __init__(
        self,
        host,
        port=None,
        username="",
        password="",
        scheme="http",
        use_async=False,
        session=None,
        timeout=HTTP_TIMEOUT,
        verify=True,
    ):
        if port is None:
            port = TR064_TLS_PORT if scheme == "https" else TR064_PORT
        self.target = ConnectionTarget(host, port, scheme)
        self.credentials = Credentials(username, password)
        self._use_async = use_async
        self._log = _getLogger("Device")
        if use_async:
            self.transport = AsyncTransport(session=session, timeout=timeout, verify=verify)
        else:
            self.transport = Transport(timeout=timeout, verify=verify)

    def __repr__(self):
        return "<Device '%s:%s'>" % (self.target.host, self.target.port)

    def __call__(self, action_spec, credentials=None, auth_context=None):
        handshake_class = AsyncHandshake if self._use_async else Handshake
        self._log.debug("%r: calling %s", self, action_spec.action_name)
        handshake = handshake_class(
            action_spec,
            credentials or self.credentials,
            self.target,
            transport=self.transport,
            auth_context=auth_context,
        )
        return handshake()
