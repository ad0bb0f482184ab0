HTTP_TIMEOUT = 5

TR064_PORT = 49000
TR064_TLS_PORT = 49443

# Upper bound for an accumulated response body, in bytes.
MAX_BODY_SIZE = 1024 * 1024
CHUNK_SIZE = 8192

SOAP_ENVELOPE_NS = "http://schemas.xmlsoap.org/soap/envelope/"
SOAP_ENCODING_NS = "http://schemas.xmlsoap.org/soap/encoding/"
SOAP_CONTENT_TYPE = 'text/xml; charset="utf-8"'

HTTP_METHOD = "POST"

# The device prefixes the realm directive with the scheme name, so the
# challenge is matched on these literal names.
DIGEST_REALM_KEY = "Digest realm"
DIGEST_NONCE_KEY = "nonce"
DIGEST_ALGORITHM_KEY = "algorithm"
DIGEST_QOP_KEY = "qop"
DIGEST_KEYS = (
    (DIGEST_REALM_KEY, "realm"),
    (DIGEST_NONCE_KEY, "nonce"),
    (DIGEST_ALGORITHM_KEY, "algorithm"),
    (DIGEST_QOP_KEY, "qop"),
)
DIGEST_QOP = "auth"
DIGEST_ALGORITHM = "MD5"
NONCE_COUNT = "00000001"

HOMEAUTO_CONTROL_URL = "/upnp/control/x_homeauto"
HOMEAUTO_SERVICE_TYPE = "urn:dslforum-org:service:X_AVM-DE_Homeauto:1"
