from collections import namedtuple
from xml.sax.saxutils import escape

from lxml import etree

from .const import SOAP_CONTENT_TYPE, SOAP_ENCODING_NS, SOAP_ENVELOPE_NS
from .errors import ERR_CODE_DESCRIPTIONS, SOAPError


def build_envelope(action_spec):
    """
    Build the SOAP 1.1 request body for `action_spec`. Nothing is escaped here:
    the action name, service type and pre-rendered arguments come from
    configuration and must already be XML-safe.
    """
    return (
        "<?xml version='1.0' encoding='utf-8'?>"
        "<s:Envelope s:encodingStyle='{encoding}' xmlns:s='{envelope}'>"
        "<s:Body>"
        "<u:{action_name} xmlns:u='{service_type}'>{arguments}</u:{action_name}>"
        "</s:Body>"
        "</s:Envelope>"
    ).format(
        encoding=SOAP_ENCODING_NS,
        envelope=SOAP_ENVELOPE_NS,
        action_name=action_spec.action_name,
        service_type=action_spec.service_type,
        arguments=action_spec.arguments_xml,
    )


def render_arguments(arguments):
    """
    Render a mapping (or a sequence of pairs) of argument names and values
    into an XML fragment for use as `ActionSpec.arguments_xml`. Values are
    escaped, names are not.
    """
    if hasattr(arguments, "items"):
        arguments = arguments.items()
    return "".join(
        "<%s>%s</%s>" % (name, escape(str(value)), name) for name, value in arguments
    )


def format_url(target, path):
    host = target.host
    if ":" in host and not host.startswith("["):
        host = "[%s]" % host
    return "%s://%s:%s%s" % (target.scheme, host, target.port, path)


class SoapRequest(namedtuple("SoapRequest", ["url", "path", "headers", "body"])):
    """
    One HTTP request of an action call. Instances are never modified; use
    `with_headers()` to derive the request that carries extra headers.
    """

    __slots__ = ()

    @classmethod
    def create(cls, action_spec, target):
        body = build_envelope(action_spec).encode("utf-8")
        headers = {
            "Content-Type": SOAP_CONTENT_TYPE,
            "Content-Length": str(len(body)),
            "SoapAction": "%s#%s" % (action_spec.service_type, action_spec.action_name),
        }
        return cls(
            format_url(target, action_spec.event_sub_url),
            action_spec.event_sub_url,
            headers,
            body,
        )

    def with_headers(self, **extra):
        headers = dict(self.headers)
        headers.update(extra)
        return self._replace(headers=headers)


def parse_fault(text):
    """
    Return a `SOAPError` describing the fault in `text`, or None if `text`
    isn't a SOAP fault.
    """
    try:
        root = etree.fromstring(text.strip().encode("utf-8"))
    except (etree.XMLSyntaxError, ValueError):
        return None
    if not root.xpath("//*[local-name()='Fault']"):
        return None

    codes = root.xpath("//*[local-name()='errorCode']/text()")
    descriptions = root.xpath("//*[local-name()='errorDescription']/text()")
    code = None
    if codes:
        try:
            code = int(codes[0].strip())
        except ValueError:
            code = codes[0].strip()
    if descriptions:
        description = descriptions[0].strip()
    else:
        faultstrings = root.xpath("//*[local-name()='faultstring']/text()")
        description = ERR_CODE_DESCRIPTIONS.get(
            code, faultstrings[0].strip() if faultstrings else "Unknown fault"
        )
    return SOAPError(code, description)
