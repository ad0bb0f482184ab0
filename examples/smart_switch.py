#!/usr/bin/env python
#
# Read the power meter, energy counter, temperature and switch state of a
# FRITZ!DECT smart plug through the TR-064 interface of a FRITZ!Box.
#
# Create a dedicated user in the FRITZ!Box web interface for this and allow
# it access to smart home settings.
#

import argparse
import getpass
import logging
import sys

import tr064client
from tr064client import homeauto


parser = argparse.ArgumentParser(description=__doc__)
parser.add_argument("host", nargs="?", default="192.168.178.1")
parser.add_argument("--port", type=int, default=tr064client.const.TR064_PORT)
parser.add_argument("--username", required=True)
parser.add_argument("--index", type=int, default=0, help="Index of the smart plug")
parser.add_argument("--debug", action="store_true")
args = parser.parse_args()

logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

box = tr064client.Device(
    args.host, port=args.port, username=args.username, password=getpass.getpass()
)
result = box(homeauto.get_generic_device_infos(args.index))
if not result.ok:
    print("%s error: %s" % (result.kind, result.error))
    sys.exit(1)

data = result.data
print("Power:       %.2f W" % (data["power"] / 100.0))
print("Energy:      %d Wh" % data["energy"])
print("Temperature: %.1f C" % (data["temperature"] / 10.0))
print("Switch:      %s" % ("on" if data["switch_state"] else "off"))
# Output: Power:       15.20 W
#         Energy:      4330 Wh
#         Temperature: 21.5 C
#         Switch:      on
