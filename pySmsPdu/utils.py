# -*- coding: utf-8 -*-

""" pySmsPdu: various utilities
"""

import re
from osmocom.utils import h2b, b2h, swap_nibbles, Hexstr
from pySmsPdu.exceptions import InvalidPduFormat

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
#

_octet_re = re.compile(r'^[0-9A-Fa-f]{2}$')

def split_octets(pdu: Hexstr) -> bytes:
    """Validate a hex encoded PDU and convert it into its octets.

    The input is consumed in chunks of two characters, every chunk must be a valid
    hex octet. An odd length leaves a single character chunk at the end which
    can never match, so it is rejected as well.

    Args:
        pdu : hex string as captured from a modem or a trace
    Returns:
        the PDU octets
    """
    if not pdu:
        raise InvalidPduFormat(pdu, 'PDU is empty')
    for i in range(0, len(pdu), 2):
        chunk = pdu[i:i+2]
        if not _octet_re.match(chunk):
            raise InvalidPduFormat(pdu, 'invalid octet %r at position %u' % (chunk, i))
    return bytes(h2b(pdu))

def semi_octets(data: bytes) -> str:
    """Convert octets holding swapped nibbles (BCD digits) into a string of upper case hex digits."""
    return swap_nibbles(b2h(data)).upper()

def bcd_int(digits: str) -> int:
    """Parse the leading decimal digits of a BCD string; filler nibbles yield 0."""
    m = re.match(r'\d+', digits)
    if not m:
        return 0
    return int(m.group(0))

def fmt_num(value) -> str:
    """Render a number without a trailing '.0' (12.5 -> '12.5', 13.0 -> '13')."""
    return '%g' % value

def ascii_guess(data: bytes) -> str:
    """Map every octet to the character with the same code point."""
    return ''.join([chr(b) for b in data])
