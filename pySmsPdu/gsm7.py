# -*- coding: utf-8 -*-

"""GSM 03.38 default alphabet text: unpacking of septets from octets and their
mapping to characters through the 'gsm03.38' codec."""

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

from typing import Optional, List
import codecs
import gsm0338 # noqa: F401


def unpack_septets(data: bytes, padding: int = 0, count: Optional[int] = None) -> List[int]:
    """Unpack 7 bit values which are packed LSB first into a sequence of octets.

    Each septet is assembled from the bits left over from the previous octet (the
    'carry') plus the low bits of the next octet; the high bits of that octet become
    the new carry. Once the carry holds 7 bits it is a complete septet by itself.

    Args:
        data : the packed octets
        padding : number of fill bits at the start of the first octet, as used to align
                  the text after a user data header on a septet boundary
        count : number of septets to unpack. If None, unpack as many as the octets hold;
                a complete septet left in the carry at the end is only returned if it is
                non-zero, as it is indistinguishable from fill bits otherwise.
    Returns:
        list of septet values
    """
    septets = []
    pos = 0
    carry = 0
    carry_bits = 0
    if padding and data:
        carry = data[0] >> padding
        carry_bits = 8 - padding
        pos = 1
    while count is None or len(septets) < count:
        if carry_bits >= 7:
            if count is None and pos >= len(data) and not carry:
                break
            septets.append(carry & 0x7f)
            carry >>= 7
            carry_bits -= 7
            continue
        if pos >= len(data):
            break
        octet = data[pos]
        pos += 1
        need = 7 - carry_bits
        septets.append(((octet & ((1 << need) - 1)) << carry_bits) | carry)
        carry = octet >> need
        carry_bits = 8 - need
    return septets


def decode_septets(septets: List[int]) -> str:
    """Map septet values to text, following escapes (0x1B) into the extension table.

    Extension table entries which are not defined (and an escape without a following
    septet) produce no output at all.
    """
    return codecs.decode(bytes(septets), 'gsm03.38', 'ignore')


def decode_gsm7(data: bytes, padding: int = 0, count: Optional[int] = None) -> str:
    """Decode packed GSM 7 bit default alphabet text.

    Without a septet count, an '@' in the last septet of a completely filled octet
    sequence is lost, see unpack_septets().
    """
    return decode_septets(unpack_septets(data, padding, count))
