"""
HTTP Digest authentication (RFC 2617, algorithm MD5, qop "auth") as spoken by
TR-064 devices.

The device answers the first, unauthenticated request with a header like

    WWW-Authenticate: Digest realm="HTTPS Access",nonce="0123456789ABCDEF",algorithm=MD5,qop="auth"

The challenge is located by searching every raw header value for the literal
text "Digest realm", and the directives are matched by name prefix, so the
scheme token is treated as part of the realm directive.
"""
import hashlib
import os
from collections import namedtuple

from .const import (
    DIGEST_ALGORITHM,
    DIGEST_KEYS,
    DIGEST_QOP,
    DIGEST_REALM_KEY,
    NONCE_COUNT,
)
from .errors import ProtocolError


def md5_hex(data):
    if not isinstance(data, bytes):
        data = data.encode("utf-8")
    return hashlib.md5(data).hexdigest()


class DigestAuthContext(namedtuple("DigestAuthContext", ["client_nonce", "nonce_count"])):
    """
    Client nonce and nonce count for exactly one authenticated request. Each
    call answers a freshly issued server nonce once, so a nonce count of 1 is
    always correct. Never share a context between calls.
    """

    __slots__ = ()

    def __new__(cls, client_nonce, nonce_count=NONCE_COUNT):
        return super(DigestAuthContext, cls).__new__(cls, client_nonce, nonce_count)

    @classmethod
    def create(cls):
        return cls(os.urandom(4).hex())


def find_challenge(raw_headers):
    """
    Return the value of the first header line containing "Digest realm", or
    None if the device didn't send a challenge.
    """
    for _, value in raw_headers:
        if DIGEST_REALM_KEY in value:
            return value
    return None


def parse_challenge(header_value):
    """
    Parse a challenge header value into a dict with the keys `realm`, `nonce`,
    `algorithm` and `qop`. Directives that aren't present are left out, so the
    result may be incomplete; see `validate_challenge()`. Token order doesn't
    matter and the last occurrence of a directive wins.
    """
    challenge = {}
    for token in header_value.split(","):
        token = token.strip()
        for directive, key in DIGEST_KEYS:
            prefix = directive + "="
            if not token.startswith(prefix):
                continue
            value = token[len(prefix):]
            if value.startswith('"'):
                value = value[1:]
                if value.endswith('"'):
                    value = value[:-1]
            challenge[key] = value
    return challenge


def validate_challenge(challenge):
    """
    Raise `ProtocolError` unless `challenge` is complete and asks for
    something we can answer.
    """
    missing = [key for _, key in DIGEST_KEYS if key not in challenge]
    if missing:
        raise ProtocolError(
            "Digest challenge is missing %s" % ", ".join(sorted(missing))
        )
    if challenge["qop"] != DIGEST_QOP:
        raise ProtocolError("Unsupported digest qop %r" % challenge["qop"])
    if challenge["algorithm"].upper() != DIGEST_ALGORITHM:
        raise ProtocolError("Unsupported digest algorithm %r" % challenge["algorithm"])
    return challenge


def compute_response(credentials, challenge, method, uri, auth_context):
    ha1 = md5_hex(
        "%s:%s:%s" % (credentials.username, challenge["realm"], credentials.password)
    )
    ha2 = md5_hex("%s:%s" % (method, uri))
    return md5_hex(
        ":".join(
            (
                ha1,
                challenge["nonce"],
                auth_context.nonce_count,
                auth_context.client_nonce,
                challenge["qop"],
                ha2,
            )
        )
    )


def build_authorization_header(credentials, challenge, uri, auth_context, response):
    return (
        'Digest username="{username}", realm="{realm}", nonce="{nonce}", '
        'uri="{uri}", qop="{qop}", nc="{nc}", cnonce="{cnonce}", '
        'response="{response}"'
    ).format(
        username=credentials.username,
        realm=challenge["realm"],
        nonce=challenge["nonce"],
        uri=uri,
        qop=challenge["qop"],
        nc=auth_context.nonce_count,
        cnonce=auth_context.client_nonce,
        response=response,
    )
