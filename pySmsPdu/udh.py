"""Code related to the User Data Header (UDH) of SMS T-PDUs"""

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

import typing
from dataclasses import dataclass, field
from construct import StreamError
from osmocom.utils import Hexstr, h2b, b2h

from pySmsPdu.construct import ConcatIE, Concat16IE, Port8IE, Port16IE, EmsTextFormattingIE
from pySmsPdu.log import PduLogger

log = PduLogger.get(__name__)

BytesOrHex = typing.Union[Hexstr, bytes]

IEI_CONCAT = 0x00
IEI_PORT8 = 0x04
IEI_PORT16 = 0x05
IEI_CONCAT16 = 0x08
IEI_EMS_TEXT_FORMATTING = 0x0A

# destination ports which carry something else than WAP
WELL_KNOWN_PORTS = {
    5505: 'Ring Tone',
    5506: 'Operator Logo',
    5507: 'Group Graphic - CLI Logo',
    9200: 'Connectionless WAP browser proxy server',
    9202: 'Secure connectionless WAP browser proxy server',
    9203: 'Secure WAP Browser proxy server',
    9204: 'vCard',
    9205: 'vCalendar',
    9206: 'Secure vCard',
    9207: 'Secure vCalendar',
}

# 3GPP TS 23.040 Section 9.2.3.24.10.1.1, colour codes of the EMS text formatting IE
EMS_COLORS = {
    0x0: 'black', 0x1: 'darkGray', 0x2: 'darkRed', 0x3: 'GoldenRod',
    0x4: 'darkGreen', 0x5: 'darkCyan', 0x6: 'darkBlue', 0x7: 'darkMagenta',
    0x8: 'gray', 0x9: 'white', 0xA: 'red', 0xB: 'yellow',
    0xC: 'green', 0xD: 'cyan', 0xE: 'blue', 0xF: 'magenta',
}


@dataclass
class FormattingRule:
    """EMS text formatting for 'length' characters starting at 'offset' of the decoded text."""
    offset: int
    length: int
    style: typing.List[str] = field(default_factory=list)

    @property
    def markup_open(self) -> str:
        if not self.style:
            return ''
        return '<span style="%s">' % '; '.join(self.style)

    @property
    def markup_close(self) -> str:
        if not self.style:
            return ''
        return '</span>'


class InformationElement:
    """A single IE of the user data header. 'length' is the declared length, 'value' the
    payload that was actually present."""
    def __init__(self, iei: int, length: typing.Optional[int], value: bytes = b''):
        self.iei = iei
        self.length = length
        self.value = value

    def __repr__(self) -> str:
        return 'IE(iei=0x%02x, length=%s, value=%s)' % (self.iei, self.length, b2h(self.value))

    @property
    def is_complete(self) -> bool:
        return self.length is not None and len(self.value) == self.length


def _length_violations(ie: InformationElement, expected: int) -> str:
    text = ''
    if ie.length != expected:
        text += ' (VIOLATION: This Information Element should have exactly %u bytes but says it has %u ' \
                'instead!)' % (expected, ie.length)
    if len(ie.value) != expected:
        text += ' (VIOLATION: This Information Element should have exactly %u bytes but actually has %u ' \
                'instead!)' % (expected, len(ie.value))
    return text


class UserDataHeader:
    """A parsed User Data Header together with everything derived from its IEs: the WAP
    indication, the concatenation info and the EMS formatting rules."""

    def __init__(self, ies: typing.List[InformationElement] = [], declared_length: typing.Optional[int] = None):
        self.ies = list(ies)
        if declared_length is None:
            declared_length = sum([2 + len(ie.value) for ie in self.ies])
        self.declared_length = declared_length
        self.is_wap = False
        self.concatenation = None
        self.formatting = []
        self.violation = False
        self._texts = []
        self._interpret()

    def __repr__(self) -> str:
        return 'UDH(%r)' % self.ies

    def has_ie(self, iei:int) -> bool:
        for ie in self.ies:
            if ie.iei == iei:
                return True
        return False

    @property
    def info(self) -> str:
        return '; '.join(self._texts)

    @staticmethod
    def parse_ies(inb: bytes) -> typing.List[InformationElement]:
        """Split the octets of a UDH (without its length octet) into IEs.

        The input is consumed greedily; an IE which is cut short by the end of the
        header is still returned with the payload that is present."""
        ies = []
        pos = 0
        while pos < len(inb):
            iei = inb[pos]
            if pos + 1 >= len(inb):
                ies.append(InformationElement(iei, None))
                break
            length = inb[pos+1]
            ies.append(InformationElement(iei, length, inb[pos+2:pos+2+length]))
            pos += 2 + length
        return ies

    @classmethod
    def from_bytes(cls, inb: BytesOrHex) -> typing.Tuple['UserDataHeader', bytes]:
        """Parse a UDH (length octet followed by the IEs) and return it with the remainder."""
        if isinstance(inb, str):
            inb = h2b(inb)
        udhl = inb[0]
        udh = cls(cls.parse_ies(inb[1:1+udhl]), udhl)
        if len(inb) < 1 + udhl:
            udh.add_violation('(VIOLATION: User Data Header should have %u bytes but actually has %u!)'
                              % (udhl, len(inb) - 1))
        return udh, inb[1+udhl:]

    def add_violation(self, text: str):
        self._texts.append(text)
        self.violation = True

    def _add_text(self, text: str):
        if 'VIOLATION' in text:
            self.violation = True
        self._texts.append(text)

    def _interpret(self):
        has_ems = False
        for ie in self.ies:
            if ie.length is None:
                self.add_violation('Information Element 0x%02X (VIOLATION: length octet missing!)' % ie.iei)
                continue
            if ie.iei == IEI_CONCAT:
                self._add_text(self._concat(ie, ConcatIE, 3, 8))
            elif ie.iei == IEI_CONCAT16:
                self._add_text(self._concat(ie, Concat16IE, 4, 16))
            elif ie.iei == IEI_PORT8:
                self._add_text(self._port8(ie))
            elif ie.iei == IEI_PORT16:
                self._add_text(self._port16(ie))
            elif ie.iei == IEI_EMS_TEXT_FORMATTING:
                has_ems = True
                self._ems(ie)
            else:
                text = 'Information Element 0x%02X: %s' % (ie.iei, b2h(ie.value) if ie.value else 'empty')
                if not ie.is_complete:
                    text += ' (VIOLATION: Information Element says it has %u bytes but actually has %u!)' \
                            % (ie.length, len(ie.value))
                self._add_text(text)
        if has_ems:
            self._texts.append('has EMS formatting')

    def _concat(self, ie: InformationElement, con, expected: int, size: int) -> str:
        try:
            d = con.parse(ie.value)
        except StreamError:
            return 'Concatenated message: incomplete' + _length_violations(ie, expected)
        if self.concatenation is None:
            self.concatenation = {'ref': d.ref, 'count': d.count, 'seq': d.seq, 'size': size}
        text = 'Concatenated message: reference number %u, part %u of %u parts' % (d.ref, d.seq, d.count)
        if size == 16:
            text += ' (16 bit reference)'
        return text + _length_violations(ie, expected)

    def _port8(self, ie: InformationElement) -> str:
        try:
            d = Port8IE.parse(ie.value)
        except StreamError:
            return 'Application port addressing (8 bit): incomplete' + _length_violations(ie, 2)
        return 'Application port addressing (8 bit): Destination port is %u, source port is %u' \
               % (d.dest_port, d.src_port) + _length_violations(ie, 2)

    def _port16(self, ie: InformationElement) -> str:
        try:
            d = Port16IE.parse(ie.value)
        except StreamError:
            return 'WDP (Wireless Datagram Protocol): incomplete' + _length_violations(ie, 4)
        name = WELL_KNOWN_PORTS.get(d.dest_port)
        if name:
            dest = '%u (%s)' % (d.dest_port, name)
        else:
            dest = '%u' % d.dest_port
            self.is_wap = True
            log.debug('destination port %u is not a well-known port, treating user data as WAP', d.dest_port)
        return 'WDP (Wireless Datagram Protocol): Destination port is %s, source port is %u' \
               % (dest, d.src_port) + _length_violations(ie, 4)

    def _ems(self, ie: InformationElement):
        try:
            d = EmsTextFormattingIE.parse(ie.value)
        except StreamError:
            self.add_violation('EMS text formatting: incomplete (VIOLATION: This Information Element should '
                               'have at least 3 bytes but actually has %u!)' % len(ie.value))
            return
        style = []
        if d.format.alignment == 'center':
            style.append('text-align: center')
        elif d.format.alignment == 'right':
            style.append('text-align: right')
        if d.format.font_size == 'large':
            style.append('font-size: large')
        elif d.format.font_size == 'small':
            style.append('font-size: small')
        if d.format.italic:
            style.append('font-style: italic')
        if d.format.bold:
            style.append('font-weight: bold')
        if d.format.underline:
            style.append('text-decoration: underline')
        if d.format.strikethrough:
            style.append('text-decoration: line-through')
        # a colour octet of all zeroes (or none at all) means: keep the default colours;
        # a foreground of 0 keeps the default text colour, a background of 0 is black
        if d.color and (d.color.foreground or d.color.background):
            if d.color.foreground:
                style.append('color: %s' % EMS_COLORS[d.color.foreground])
            style.append('background-color: %s' % EMS_COLORS[d.color.background])
        self.formatting.append(FormattingRule(d.start, d.length, style))
