#!/usr/bin/env python3

# Utility to decode SMS PDUs (SMS-DELIVER / SMS-SUBMIT) as exchanged with a modem
# in PDU mode into human readable fields.
#
# (C) 2026 by the pySmsPdu contributors
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 2 of the License, or
# (at your option) any later version.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with this program.  If not, see <http://www.gnu.org/licenses/>.

import argparse
import json
import logging
import re
import sys
from typing import List

import cmd2
from cmd2 import style
from packaging import version
# cmd2 >= 2.3.0 has deprecated the bg/fg in favor of Bg/Fg :(
if version.parse(cmd2.__version__) < version.parse("2.3.0"):
    from cmd2 import fg # pylint: disable=no-name-in-module
    RED = fg.red
    LIGHT_RED = fg.bright_red
    YELLOW = fg.yellow
else:
    from cmd2 import Fg # pylint: disable=no-name-in-module
    RED = Fg.RED
    LIGHT_RED = Fg.LIGHT_RED
    YELLOW = Fg.YELLOW

from osmocom.utils import JsonEncoder

from pySmsPdu.exceptions import InvalidPduFormat
from pySmsPdu.fields import FieldRecord
from pySmsPdu.log import PduLogger
from pySmsPdu.sms import decode_pdu
from pySmsPdu.wap import HttpWbxmlDecoder, WBXML_TIMEOUT_MS

log = PduLogger.get(__name__)

option_parser = argparse.ArgumentParser(description='Decode SMS PDUs (SMS-DELIVER / SMS-SUBMIT) into their fields',
                                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
option_parser.add_argument('pdu', nargs='+', help='SMS PDU as hex string, starting with the SMSC address')
option_parser.add_argument('--wbxml-url', default=None,
                           help='URL of a HTTP service decoding the WBXML body of WAP push messages')
option_parser.add_argument('--wbxml-timeout', type=int, default=WBXML_TIMEOUT_MS,
                           help='Timeout (in milliseconds) for the WBXML decoding service')
option_parser.add_argument('--hide', action='store_true', default=False,
                           help='Hide the header fields and only show the user data related fields')
option_parser.add_argument('--json', action='store_true', default=False,
                           help='Output the decoded fields as JSON')
option_parser.add_argument('--verbose', help="Enable verbose logging",
                           action='store_true', default=False)


def format_records(records: List[FieldRecord], use_color: bool = True) -> str:
    width = max([len(r.label) for r in records] + [0])
    lines = []
    for r in records:
        line = '%-*s  %s' % (width, r.label, r.value)
        if r.violation and use_color:
            line = style(line, fg=RED)
        lines.append(line)
    return '\n'.join(lines)


if __name__ == '__main__':
    opts = option_parser.parse_args()

    PduLogger.setup(print, {logging.WARN: YELLOW, logging.ERROR: LIGHT_RED})
    if opts.verbose:
        PduLogger.set_verbose(True)
        PduLogger.set_level(logging.DEBUG)

    wbxml_decoder = None
    if opts.wbxml_url:
        wbxml_decoder = HttpWbxmlDecoder(opts.wbxml_url)

    rc = 0
    results = []
    for pdu in opts.pdu:
        # modem output is often wrapped or grouped into blocks
        pdu = re.sub(r'\s', '', pdu)
        try:
            records = decode_pdu(pdu, wbxml_decoder, opts.wbxml_timeout)
        except InvalidPduFormat as e:
            log.error('%s: %s', pdu, e)
            rc = 1
            continue
        if opts.hide:
            records = [r for r in records if not r.hideable]
        if opts.json:
            results.append({'pdu': pdu, 'fields': [r.to_dict() for r in records]})
        else:
            if len(opts.pdu) > 1:
                print('PDU: %s' % pdu)
            print(format_records(records, sys.stdout.isatty()))
            print()

    if opts.json:
        print(json.dumps(results, cls=JsonEncoder, indent=4))

    sys.exit(rc)
