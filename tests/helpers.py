import hashlib
from functools import wraps


class SimpleMock(dict):
    """Case insensitive dict to mock HTTP response."""
    def __init__(self, *args, **kwargs):
        super(SimpleMock, self).__init__(*args, **kwargs)
        for k in list(self.keys()):
            v = super(SimpleMock, self).pop(k)
            self.__setitem__(k, v)

    def __setitem__(self, key, value):
        super(SimpleMock, self).__setitem__(str(key).lower(), value)

    def __getitem__(self, key):
        if key.lower() not in self:
            return None
        return super(SimpleMock, self).__getitem__(key.lower())

    def __setattr__(self, key, value):
        self.__setitem__(key, value)

    def __getattr__(self, key):
        return self.__getitem__(key)


class SimpleMockRequest(SimpleMock):
    """Case insensitive dict interface for an aiohttp Request object."""
    def update(self, request, body):
        self.clear()
        self.headers = SimpleMock(request.headers)
        self.url = str(request.url)
        self.method = request.method
        self.path = request.path
        self.body = body


def async_test(f):
    """
    Decorator to create asyncio context for asyncio methods or functions.
    """
    @wraps(f)
    def g(*args, **kwargs):
        args[0].loop.run_until_complete(f(*args, **kwargs))
    return g


def md5(text):
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def reference_digest(username, password, realm, nonce, uri, cnonce, nc="00000001", method="POST"):
    """
    RFC 2617 qop=auth response, written out longhand.
    """
    ha1 = md5(username + ":" + realm + ":" + password)
    ha2 = md5(method + ":" + uri)
    return md5(ha1 + ":" + nonce + ":" + nc + ":" + cnonce + ":auth:" + ha2)


def authorization_params(header):
    """
    Split an Authorization header value into a dict of its directives.
    """
    assert header.startswith("Digest ")
    params = {}
    for item in header[len("Digest "):].split(", "):
        key, value = item.split("=", 1)
        params[key] = value.strip('"')
    return params
