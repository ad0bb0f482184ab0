# Copyright (c) 2026, The TR064Client developers
#
# Permission is hereby granted, free of charge, to any person obtaining a copy
# of this software and associated documentation files (the "Software"), to deal
# in the Software without restriction, including without limitation the rights
# to use, copy, modify, merge, publish, distribute, sublicense, and/or sell
# copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in
# all copies or substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR
# IMPLIED, INCLUDING BUT NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY,
# FITNESS FOR A PARTICULAR PURPOSE AND NONINFRINGEMENT. IN NO EVENT SHALL THE
# AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM, DAMAGES OR OTHER
# LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM,
# OUT OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE
# SOFTWARE.

# Todo:
#  - Reuse the server nonce for follow-up calls (nc > 1) to save the
#    unauthenticated round trip.
#  - Build ActionSpecs from the device's tr64desc.xml/SCPD files.

"""
This module provides a minimal TR-064 client. TR-064 is the SOAP-over-HTTP
control protocol of AVM FRITZ!Box routers and similar home gateways. Actions
are protected with HTTP Digest authentication.

The flow of an action call is:

- Build the SOAP envelope.

  The envelope is built once from an ActionSpec (control path, service type,
  action name and pre-rendered arguments) and sent unchanged with every
  request of the call.

- Request the challenge.

  The envelope is POSTed without credentials. The device answers with a
  "WWW-Authenticate: Digest realm=..." header carrying a fresh nonce. If no
  such header is present the session counts as authenticated already and the
  body of this first response is the result.

- Answer the challenge.

  The RFC 2617 (MD5, qop "auth") response is computed from the credentials
  and the nonce, and the envelope is POSTed again with an Authorization
  header built from it.

- Extract the result.

  The configured result tags are read from the response body with a flat
  substring scan and converted to Python values.

Every call returns a CallResult. Failures (TransportError, ProtocolError,
ExtractionError) are delivered in `result.error` instead of being raised.

The following example reads the power meter of the first smart plug:

------------------------------------------------------------------------------
import tr064client
from tr064client import homeauto

box = tr064client.Device("192.168.178.1", username="smarthome", password="secret")
result = box(homeauto.get_generic_device_infos(0))
if result.ok:
    print("%.2f W" % (result.data["power"] / 100.0))
else:
    print("%s error: %s" % (result.kind, result.error))
------------------------------------------------------------------------------

Useful Links:

* https://avm.de/service/schnittstellen/
* https://tools.ietf.org/html/rfc2617
"""
from tr064client import const, digest, errors, extract, homeauto, marshal, soap, transport, tr064, util  # noqa: F401
from .errors import ErrorKind, TR064Error, TransportError, ProtocolError, ExtractionError, SOAPError
from .soap import build_envelope, render_arguments
from .tr064 import (
    ActionSpec, CallResult, ConnectionTarget, Credentials, Device, ResultField,
    call_action, async_call_action)

__all__ = [
    "ActionSpec", "CallResult", "ConnectionTarget", "Credentials", "Device", "ResultField",
    "call_action", "async_call_action", "build_envelope", "render_arguments",
    "ErrorKind", "TR064Error", "TransportError", "ProtocolError", "ExtractionError", "SOAPError",
]
