# -*- coding: utf-8 -*-

""" pySmsPdu: decoding of the TP-User-Data text
"""

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

import codecs
from typing import Optional, List

from pySmsPdu.fields import Alphabet
from pySmsPdu.gsm7 import decode_gsm7
from pySmsPdu.udh import FormattingRule
from pySmsPdu.utils import ascii_guess


def apply_formatting(text: str, rules: List[FormattingRule]) -> str:
    """Wrap the text spans addressed by EMS formatting rules into style markup.

    Offsets always refer to the unformatted text. The rules are applied one after
    another, each one wrapping the first occurrence of its span in the text as
    produced by the rules before it.
    """
    original = text
    for rule in rules:
        span = original[rule.offset:rule.offset + rule.length]
        if not span or not rule.style:
            continue
        text = text.replace(span, rule.markup_open + span + rule.markup_close, 1)
    return text


def decode_user_data(data: bytes, alphabet: Alphabet, padding: int = 0,
                     formatting: List[FormattingRule] = [], count: Optional[int] = None) -> str:
    """Decode the user data octets following the (optional) user data header.

    Args:
        data : the user data octets, without the header
        alphabet : alphabet as determined from the Data Coding Scheme
        padding : fill bits in front of the first septet (default alphabet only)
        formatting : EMS formatting rules from the user data header
        count : number of septets to decode (default alphabet only), None to decode all
    Returns:
        the decoded text
    """
    if alphabet == Alphabet.DEFAULT:
        text = decode_gsm7(data, padding, count)
    elif alphabet == Alphabet.UCS2:
        text = codecs.decode(data, 'utf_16_be', 'replace')
    elif alphabet == Alphabet.EIGHT_BIT:
        text = '(unknown binary data, try ASCII decoding) ' + ascii_guess(data)
    else:
        text = '(unrecognized alphabet, try ASCII decoding) ' + ascii_guess(data)

    if formatting:
        text = apply_formatting(text, formatting)
    return text
