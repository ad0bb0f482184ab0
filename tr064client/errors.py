class ErrorKind(object):
    TRANSPORT = "transport"
    PROTOCOL = "protocol"
    EXTRACTION = "extraction"


class TR064Error(Exception):
    """
    Base class for everything that can go wrong during an action call.
    """

    kind = None


class TransportError(TR064Error):
    """
    Connection refused, DNS failure, timeout, socket error mid-stream or an
    oversized response body.
    """

    kind = ErrorKind.TRANSPORT


class ProtocolError(TR064Error):
    """
    The device sent a digest challenge we can't answer.
    """

    kind = ErrorKind.PROTOCOL


class ExtractionError(TR064Error):
    """
    The response body didn't contain the expected values.
    """

    kind = ErrorKind.EXTRACTION


class SOAPError(ExtractionError):
    """
    The response body was a SOAP fault instead of an action response.
    """

    def __init__(self, code, description):
        super(SOAPError, self).__init__(code, description)
        self.code = code
        self.description = description

    def __str__(self):
        return "SOAP fault %s: %s" % (self.code, self.description)


class ErrorCodeDescriptions(object):
    """
    Lookup of UPnP/TR-064 control error codes. Codes without a dedicated
    description fall back to the description of the range they belong to.
    """

    _descriptions = {
        401: "Invalid Action",
        402: "Invalid Args",
        501: "Action Failed",
        600: "Argument Value Invalid",
        601: "Argument Value Out of Range",
        602: "Optional Action Not Implemented",
        603: "Out of Memory",
        604: "Human Intervention Required",
        605: "String Argument Too Long",
        606: "Action Not Authorized",
        713: "Specified Array Index Invalid",
        714: "No Such Array Entry",
        820: "Internal Error",
    }

    _ranges = (
        (607, 612, "These ErrorCodes are reserved for UPnP DeviceSecurity."),
        (613, 699, "Common action errors. Defined by UPnP Forum Technical Committee."),
        (700, 799, "Action-specific errors defined by UPnP Forum working committee."),
        (
            800,
            899,
            "Action-specific errors for non-standard actions. Defined by UPnP vendor.",
        ),
    )

    def __getitem__(self, key):
        if not isinstance(key, int):
            raise KeyError("'key' must be an integer")
        try:
            return self._descriptions[key]
        except KeyError:
            pass
        for low, high, description in self._ranges:
            if low <= key <= high:
                return description
        raise KeyError(key)

    def get(self, key, default=None):
        try:
            return self[key]
        except KeyError:
            return default


ERR_CODE_DESCRIPTIONS = ErrorCodeDescriptions()
