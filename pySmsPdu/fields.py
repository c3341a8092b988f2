# -*- coding: utf-8 -*-

"""Decoders for the fixed size fields of a SMS T-PDU.

Every decoder is a pure function of one octet (or a short octet slice) and returns
a human readable description, plus the structured information the PDU walker needs
to interpret the fields that follow.
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

import enum
from dataclasses import dataclass, field
from typing import Optional, List, Tuple

from osmocom.construct import TonNpi

from pySmsPdu.construct import MessageTypeIndicator, DeliverFlags, SubmitFlags
from pySmsPdu.construct import DcsGeneral, DcsMessageWaiting, DcsMessageClass
from pySmsPdu.construct import Scts, VpEnhancedIndicator
from pySmsPdu.utils import semi_octets, bcd_int, fmt_num


class Alphabet(enum.Enum):
    """Character set of the user data as selected by the Data Coding Scheme."""
    DEFAULT = 'default'
    EIGHT_BIT = '8bit'
    UCS2 = 'ucs2'
    RESERVED = 'reserved'


@dataclass
class FieldRecord:
    """One labeled row of the decode result."""
    label: str
    value: str
    hideable: bool = False
    violation: bool = False

    def to_dict(self) -> dict:
        return {'label': self.label, 'value': self.value,
                'hideable': self.hideable, 'violation': self.violation}


@dataclass
class PduType:
    """Decoded first octet (TP-MTI and the flags sharing its octet)."""
    mti: int
    name: Optional[str] = None
    udhi: bool = False
    vpf: Optional[str] = None
    flags: List[str] = field(default_factory=list)
    info: str = ''

    @property
    def is_deliver(self) -> bool:
        return self.name == 'deliver'

    @property
    def is_submit(self) -> bool:
        return self.name == 'submit'


@dataclass
class DataCodingScheme:
    alphabet: Alphabet = Alphabet.DEFAULT
    message_class: Optional[int] = None
    compressed: bool = False
    info: str = ''
    violation: bool = False


@dataclass
class UserDataLength:
    septets: int
    octets: int
    chars: int

    @property
    def info(self) -> str:
        return '%u characters, %u bytes' % (self.chars, self.octets)


@dataclass
class UserDataHeaderLength:
    length: int
    padding: int = 0

    @property
    def septets(self) -> int:
        """Number of septets occupied by the header including its length octet and fill bits."""
        return ((self.length + 1) * 8 + self.padding) // 7

    @property
    def info(self) -> str:
        return '%u bytes' % self.length


def decode_number(data: bytes, length: Optional[int] = None) -> Tuple[str, bool]:
    """Decode a BCD encoded call number with swapped nibbles.

    A trailing non-digit, or a digit beyond the declared number length, is a filler
    nibble and is removed. Anything but 'F' as filler is reported.

    Args:
        data : the address value octets
        length : the declared number of digits (semi-octets), if known
    Returns:
        tuple of (number, violation flag)
    """
    number = semi_octets(data)
    if number and (not number[-1].isdigit() or (length and len(number) > length)):
        filler = number[-1]
        number = number[:-1]
        if filler != 'F':
            return number + ' (VIOLATION: number not padded with "F" but with "%s"!)' % filler, True
    return number, False


TON_TEXT = {
    'unknown': 'Unknown type of address',
    'international': 'International number',
    'national': 'National number',
    'network_specific': 'Network specific number',
    'short_code': 'Subscriber number',
    'alphanumeric': 'Alphanumeric, (coded according to GSM TS 03.38 7-bit default alphabet)',
    'abbreviated': 'Abbreviated number',
    'reserved_for_extension': 'Reserved for extension',
}

NPI_TEXT = {
    'unknown': 'Unknown',
    'isdn_e164': 'ISDN/telephone numbering plan (E.164/E.163)',
    'data_x121': 'Data numbering plan (X.121)',
    'telex_f69': 'Telex numbering plan',
    'national': 'National numbering plan',
    'private': 'Private numbering plan',
    'ermes': 'ERMES numbering plan (ETSI DE/PS 3 01-3)',
    'reserved_for_extension': 'Reserved for extension',
}

def decode_toa(octet: int) -> Tuple[str, bool]:
    """Decode a Type-of-Address octet into (description, violation flag)."""
    d = TonNpi.parse(bytes([octet]))
    text = TON_TEXT.get(d.type_of_number, 'Reserved type of address')
    text += ', ' + NPI_TEXT.get(d.numbering_plan_id, 'Reserved numbering plan')
    if not d.ext:
        return text + ' (VIOLATION: Highest bit should always be set!)', True
    return text, False

def is_alphanumeric(toa: int) -> bool:
    return (toa & 0x70) == 0x50


def decode_tom(octet: int) -> PduType:
    """Decode the first octet of the T-PDU (message type and flags).

    Only SMS-DELIVER and SMS-SUBMIT are decoded in detail; for all other message
    types only the type itself is reported.
    """
    raw = bytes([octet])
    mti = MessageTypeIndicator.parse(raw).tp_mti
    flags = []
    if mti == 0:
        d = DeliverFlags.parse(raw)
        pt = PduType(mti, 'deliver', udhi=d.tp_udhi)
        text = 'SMS-DELIVER'
        if d.tp_rp:
            flags.append('TP-RP (Reply path exists)')
        if d.tp_udhi:
            flags.append('TP-UDHI (User data header indicator)')
        if d.tp_sri:
            flags.append('TP-SRI (Status report indication)')
        if d.tp_lp:
            flags.append('TP-LP (Loop prevention)')
        # TP-MMS is inverted: 0 means there are more messages waiting
        if not d.tp_mms:
            flags.append('TP-MMS (More messages to send)')
    elif mti == 1:
        d = SubmitFlags.parse(raw)
        vpf = None if d.tp_vpf == 'none' else str(d.tp_vpf)
        pt = PduType(mti, 'submit', udhi=d.tp_udhi, vpf=vpf)
        text = 'SMS-SUBMIT'
        if d.tp_rp:
            flags.append('TP-RP (Reply path exists)')
        if d.tp_udhi:
            flags.append('TP-UDHI (User data header indicator)')
        if d.tp_srr:
            flags.append('TP-SRR (Status report request)')
        if vpf:
            flags.append('TP-VPF (Validity Period Format): %s format' % vpf)
        if d.tp_rd:
            flags.append('TP-RD (Reject duplicates)')
    elif mti == 2:
        pt = PduType(mti)
        text = 'SMS-STATUS-REPORT or SMS-COMMAND (not supported)'
    else:
        pt = PduType(mti)
        text = 'Reserved message type (not supported)'
    if flags:
        text += ', Flags: ' + ', '.join(flags)
    pt.flags = flags
    pt.info = text
    return pt


PID_TELEMATIC = {
    0x00: 'implicit',
    0x01: 'telex',
    0x02: 'group 3 telefax',
    0x03: 'group 4 telefax',
    0x04: 'voice telephone - speech conversion',
    0x05: 'ERMES - European Radio Messaging System',
    0x06: 'National Paging System',
    0x07: 'Videotex - T.100/T.101',
    0x08: 'teletex, carrier unspecified',
    0x09: 'teletex, in PSPDN',
    0x0A: 'teletex, in CSPDN',
    0x0B: 'teletex, in analog PSTN',
    0x0C: 'teletex, in digital ISDN',
    0x0D: 'UCI - Universal Computer Interface, ETSI DE/PS 3 01-3',
    0x10: 'message handling facility known to the SC',
    0x11: 'public X.400-based message handling system',
    0x12: 'Internet E-Mail',
    0x1F: 'GSM mobile station',
}
PID_TELEMATIC.update({x: 'SC specific value' for x in range(0x18, 0x1F)})

PID_SHORT_MESSAGE = {x: 'Short Message Type %u' % x for x in range(0, 8)}
PID_SHORT_MESSAGE.update({
    0x1F: 'Return Call Message',
    0x3C: 'ANSI-136 R-DATA',
    0x3D: 'ME Data download',
    0x3E: 'ME De-personalization Short Message',
    0x3F: 'SIM Data download',
})

def decode_pid(octet: int) -> str:
    """Decode the TP-Protocol-Identifier: first by the two top bits, then by the rest."""
    group = octet & 0xC0
    if group == 0x00:
        low5 = octet & 0x1F
        if octet & 0x20:
            return 'Telematic interworking (Type: %s)' % PID_TELEMATIC.get(low5, 'reserved')
        text = 'SME-to-SME protocol'
        if low5:
            text += ' (Unknown bitmask: %s - in case of SMS-DELIVER these indicate the SM-AL protocol ' \
                    'being used between the SME and the MS!)' % format(low5, 'b')
        return text
    elif group == 0x40:
        return PID_SHORT_MESSAGE.get(octet & 0x3F, 'reserved')
    elif group == 0x80:
        return 'reserved'
    return 'SC specific use'


CLASS_TEXT = {
    0: 'immediate display',
    1: 'ME specific',
    2: 'SIM specific',
    3: 'TE specific',
}

ALPHABET_TEXT = {
    'default': ('default alphabet', Alphabet.DEFAULT),
    'eight_bit': ('8 bit data', Alphabet.EIGHT_BIT),
    'ucs2': ('UCS2 (16 bit)', Alphabet.UCS2),
    'reserved': ('reserved alphabet', Alphabet.RESERVED),
}

MWI_GROUP_TEXT = {
    0xC0: 'Message Waiting Indication Group: Discard Message',
    0xD0: 'Message Waiting Indication Group: Store Message, standard encoding',
    0xE0: 'Message Waiting Indication Group: Store Message, UCS2 encoding',
}

MWI_INDICATION_TEXT = {
    'voicemail': 'Voicemail Message Waiting',
    'fax': 'Fax Message Waiting',
    'email': 'E-Mail Message Waiting',
    'other': 'Other Message Waiting (not yet standardized)',
}

def _class_text(message_class: int) -> str:
    return 'Class %u - %s' % (message_class, CLASS_TEXT[message_class])

def decode_dcs(octet: int) -> DataCodingScheme:
    """Decode the TP-Data-Coding-Scheme (3GPP TS 23.038 Section 4)."""
    raw = bytes([octet])
    group = octet & 0xF0
    dcs = DataCodingScheme()
    if group <= 0x30:
        d = DcsGeneral.parse(raw)
        alphabet_text, dcs.alphabet = ALPHABET_TEXT[d.alphabet]
        dcs.compressed = d.compressed
        parts = ['General Data Coding groups',
                 'compressed' if d.compressed else 'uncompressed',
                 alphabet_text]
        if d.has_class:
            dcs.message_class = d.message_class
            parts.append(_class_text(d.message_class))
        else:
            parts.append('no message class set (but given bits would be: %s)' % _class_text(d.message_class))
        dcs.info = ', '.join(parts)
    elif group <= 0xB0:
        dcs.info = 'Reserved coding groups'
    elif group <= 0xE0:
        d = DcsMessageWaiting.parse(raw)
        if group == 0xE0:
            dcs.alphabet = Alphabet.UCS2
        parts = [MWI_GROUP_TEXT[group],
                 'Set Indication Active' if d.active else 'Set Indication Inactive']
        if d.reserved:
            parts.append('(reserved bit set, but should not!)')
        parts.append(MWI_INDICATION_TEXT[d.indication])
        dcs.info = ', '.join(parts)
    else:
        d = DcsMessageClass.parse(raw)
        parts = ['Data coding/message class']
        if d.reserved:
            parts.append('(VIOLATION: reserved bit set, but should not!)')
            dcs.violation = True
        if d.eight_bit:
            dcs.alphabet = Alphabet.EIGHT_BIT
            parts.append('8 bit data')
        else:
            parts.append('Default alphabet')
        dcs.message_class = d.message_class
        parts.append(_class_text(d.message_class))
        dcs.info = ', '.join(parts)
    return dcs


def decode_scts(data: bytes) -> str:
    """Decode a 7 octet time stamp (TP-SCTS, or an absolute TP-VP).

    Returns:
        time stamp in the format 'YYYY-MM-DD HH:MM:SS GMT +/-X', X in hours
    """
    d = Scts.parse(data)
    year, month, day, hour, minute, second = [x.upper() for x in (d.year, d.month, d.day,
                                                                   d.hour, d.minute, d.second)]
    century = '20' if bcd_int(year) < 70 else '19'
    ts = '%s%s-%s-%s %s:%s:%s GMT ' % (century, year, month, day, hour, minute, second)
    # quarter hours, the tens digit sits in the low nibble with the sign in its top bit
    tz = d.timezone
    quarters = (tz & 0x07) * 10 + (tz >> 4)
    ts += '-' if tz & 0x08 else '+'
    return ts + fmt_num(quarters / 4)


def decode_udl(octet: int, alphabet: Alphabet) -> UserDataLength:
    """Decode the TP-User-Data-Length, which counts septets for the default alphabet
    and octets otherwise."""
    if alphabet == Alphabet.DEFAULT:
        octets = (octet * 7 + 7) // 8
    else:
        octets = octet
    if alphabet == Alphabet.UCS2:
        chars = octets // 2
    else:
        chars = octet
    return UserDataLength(octet, octets, chars)


def decode_udhl(octet: int, alphabet: Alphabet) -> UserDataHeaderLength:
    """Decode the User-Data-Header-Length and compute the fill bits which align the
    start of the text on a septet boundary (default alphabet only)."""
    padding = 0
    if alphabet == Alphabet.DEFAULT:
        udh_bits = (octet + 1) * 8
        padding = -udh_bits % 7
    return UserDataHeaderLength(octet, padding)


def decode_mr(octet: int) -> str:
    if octet == 0:
        return 'Mobile equipment sets reference number'
    return '0x%02X' % octet


def decode_vp_relative(octet: int) -> str:
    """Decode a relative TP-Validity-Period (3GPP TS 23.040 Section 9.2.3.12.1)."""
    if octet < 144:
        return '%u minutes' % ((octet + 1) * 5)
    elif octet < 168:
        return '%s hours' % fmt_num((octet - 143) * 30 / 60 + 12)
    elif octet < 197:
        return '%u days' % (octet - 166)
    return '%u weeks' % (octet - 192)


def decode_vp_enhanced(data: bytes) -> str:
    """Decode an enhanced TP-Validity-Period (3GPP TS 23.040 Section 9.2.3.12.3)."""
    d = VpEnhancedIndicator.parse(data[0:1])
    if d.format == 'none':
        text = 'no validity period specified'
    elif d.format == 'relative':
        text = decode_vp_relative(data[1])
    elif d.format == 'seconds':
        text = '%u seconds' % data[1]
    elif d.format == 'hhmmss':
        digits = semi_octets(data[1:4])
        text = '%s:%s:%s hours' % (digits[0:2], digits[2:4], digits[4:6])
    else:
        text = 'reserved validity period format %u' % d.format
    if d.single_shot:
        text += ', single shot SM'
    if d.extension:
        text += ', extended functionality indicator'
    return 'enhanced format: ' + text
