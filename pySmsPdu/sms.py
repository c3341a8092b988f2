"""Code related to SMS T-PDU Decoding"""
# Walks the octets of a SMS-DELIVER or SMS-SUBMIT T-PDU (with its leading SMSC
# address, as received from a modem via AT+CMGR in PDU mode) and describes every
# field it passes.

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

from typing import Optional, List

from pySmsPdu.exceptions import TruncatedPduError
from pySmsPdu.fields import FieldRecord, PduType, DataCodingScheme, Alphabet
from pySmsPdu.fields import decode_number, decode_toa, is_alphanumeric, decode_tom, decode_pid
from pySmsPdu.fields import decode_dcs, decode_scts, decode_udl, decode_udhl, decode_mr
from pySmsPdu.fields import decode_vp_relative, decode_vp_enhanced
from pySmsPdu.gsm7 import decode_gsm7
from pySmsPdu.log import PduLogger
from pySmsPdu.udh import UserDataHeader
from pySmsPdu.user_data import decode_user_data
from pySmsPdu.utils import split_octets, Hexstr
from pySmsPdu.wap import WbxmlDecoder, decode_wap, WBXML_TIMEOUT_MS

log = PduLogger.get(__name__)


class DecodeContext:
    """State of a single decode run: the octets, the read cursor and the records
    emitted so far."""

    def __init__(self, octets: bytes):
        self.octets = octets
        self.pos = 0
        self.records = []

    def __repr__(self) -> str:
        return 'DecodeContext(pos=%u/%u, records=%u)' % (self.pos, len(self.octets), len(self.records))

    def read_octet(self, field: str) -> int:
        """Read one octet and advance the cursor past it."""
        if self.pos >= len(self.octets):
            raise TruncatedPduError(field, self.pos)
        octet = self.octets[self.pos]
        self.pos += 1
        return octet

    def read_octets(self, num: int, field: str) -> bytes:
        """Read 'num' octets and advance the cursor past them; all of them must be present."""
        if self.pos + num > len(self.octets):
            raise TruncatedPduError(field, self.pos)
        data = self.octets[self.pos:self.pos+num]
        self.pos += num
        return data

    def emit(self, label: str, value: str, hideable: bool = False, violation: bool = False):
        self.records.append(FieldRecord(label, value, hideable, violation))


def _decode_smsc(ctx: DecodeContext):
    length = ctx.read_octet('SMSC length')
    if not length:
        return
    toa = ctx.read_octet('SMSC number info')
    number, number_violation = decode_number(ctx.read_octets(length - 1, 'SMSC number'))
    toa_info, toa_violation = decode_toa(toa)
    ctx.emit('SMSC number', number, hideable=True, violation=number_violation)
    ctx.emit('SMSC number info', toa_info, hideable=True, violation=toa_violation)


def _decode_address(ctx: DecodeContext):
    """Decode originator (SMS-DELIVER) or destination (SMS-SUBMIT) address. The length
    counts semi-octets; an empty address has no Type-of-Address octet."""
    num_digits = ctx.read_octet('Number length')
    if not num_digits:
        return
    toa = ctx.read_octet('Number info')
    digits = ctx.read_octets((num_digits + 1) // 2, 'Number')
    if is_alphanumeric(toa):
        number, number_violation = decode_gsm7(digits, count=num_digits * 4 // 7), False
    else:
        number, number_violation = decode_number(digits, num_digits)
    toa_info, toa_violation = decode_toa(toa)
    ctx.emit('Number', number, hideable=True, violation=number_violation)
    ctx.emit('Number info', toa_info, hideable=True, violation=toa_violation)


def _decode_protocol_fields(ctx: DecodeContext) -> DataCodingScheme:
    ctx.emit('Protocol Identifier', decode_pid(ctx.read_octet('Protocol Identifier')), hideable=True)
    dcs = decode_dcs(ctx.read_octet('Data Coding Scheme'))
    ctx.emit('Data Coding Scheme', dcs.info, hideable=True, violation=dcs.violation)
    return dcs


def _decode_validity_period(ctx: DecodeContext, vpf: str):
    if vpf == 'relative':
        value = decode_vp_relative(ctx.read_octet('Validity Period'))
    elif vpf == 'absolute':
        value = 'until ' + decode_scts(ctx.read_octets(7, 'Validity Period'))
    else:
        value = decode_vp_enhanced(ctx.read_octets(7, 'Validity Period'))
    ctx.emit('Validity Period', value, hideable=True)


def _decode_user_data(ctx: DecodeContext, pdu_type: PduType, dcs: DataCodingScheme,
                      wbxml_decoder: Optional[WbxmlDecoder], wbxml_timeout_ms: int):
    udl = decode_udl(ctx.read_octet('User Data Length'), dcs.alphabet)
    ctx.emit('User Data Length', udl.info)
    start = ctx.pos
    expected_end = start + udl.octets

    udh = None
    padding = 0
    formatting = []
    count = udl.septets
    if pdu_type.udhi:
        udhl = decode_udhl(ctx.read_octet('User Data Header Length'), dcs.alphabet)
        ctx.emit('User Data Header Length', udhl.info)
        udh, _ = UserDataHeader.from_bytes(ctx.octets[start:])
        ctx.emit('User Data Header', udh.info, violation=udh.violation)
        ctx.pos += udhl.length
        padding = udhl.padding
        formatting = udh.formatting
        count = max(0, udl.septets - udhl.septets)

    log.debug('user data at octet %u, expected end at octet %u of %u', ctx.pos, expected_end, len(ctx.octets))
    body = ctx.octets[ctx.pos:expected_end]

    if udh is not None and udh.is_wap:
        ctx.emit('User Data', 'Wireless Session Protocol (WSP) / WBXML')
        ctx.records.extend(decode_wap(body, wbxml_decoder, wbxml_timeout_ms))
        return

    if dcs.alphabet != Alphabet.DEFAULT:
        count = None
    ctx.emit('User Data', decode_user_data(body, dcs.alphabet, padding, formatting, count))
    if expected_end < len(ctx.octets):
        log.warning('PDU has %u more octets than declared', len(ctx.octets) - expected_end)
        ctx.emit('VIOLATION', 'PDU longer than expected!', violation=True)
        # no septet count beyond TP-UDL: a final '@' is indistinguishable from fill bits
        ctx.emit('User Data with additional octets',
                 decode_user_data(ctx.octets[ctx.pos:], dcs.alphabet, padding, formatting))
    elif expected_end > len(ctx.octets):
        log.warning('PDU has %u octets less than declared', expected_end - len(ctx.octets))
        ctx.emit('VIOLATION', 'PDU shorter than expected!', violation=True)


def _decode_tpdu(ctx: DecodeContext, wbxml_decoder: Optional[WbxmlDecoder], wbxml_timeout_ms: int):
    _decode_smsc(ctx)

    pdu_type = decode_tom(ctx.read_octet('PDU Type'))
    ctx.emit('PDU Type', pdu_type.info, hideable=True)
    log.debug('PDU type %s (TP-MTI %u)', pdu_type.name, pdu_type.mti)

    if pdu_type.is_deliver:
        _decode_address(ctx)
        dcs = _decode_protocol_fields(ctx)
        ctx.emit('Service Centre Time Stamp',
                 decode_scts(ctx.read_octets(7, 'Service Centre Time Stamp')), hideable=True)
    elif pdu_type.is_submit:
        ctx.emit('TP Message Reference', decode_mr(ctx.read_octet('TP Message Reference')), hideable=True)
        _decode_address(ctx)
        dcs = _decode_protocol_fields(ctx)
        if pdu_type.vpf:
            _decode_validity_period(ctx, pdu_type.vpf)
    else:
        # the layout of all other message types is not known here
        return

    _decode_user_data(ctx, pdu_type, dcs, wbxml_decoder, wbxml_timeout_ms)


def decode_pdu(pdu: Hexstr, wbxml_decoder: Optional[WbxmlDecoder] = None,
               wbxml_timeout_ms: int = WBXML_TIMEOUT_MS) -> List[FieldRecord]:
    """Decode a SMS PDU (SMSC address followed by a SMS-DELIVER or SMS-SUBMIT T-PDU).

    Every syntactically valid input results in a list of records; anything wrong
    with the PDU itself is reported as a record (or a record flagged as violation).

    Args:
        pdu : the PDU as hex string
        wbxml_decoder : external decoder for the body of WAP push messages
        wbxml_timeout_ms : time limit for a single call of the WBXML decoder
    Returns:
        ordered list of FieldRecord
    Raises:
        InvalidPduFormat if the input is not a non-empty hex string of even length
    """
    ctx = DecodeContext(split_octets(pdu))
    try:
        _decode_tpdu(ctx, wbxml_decoder, wbxml_timeout_ms)
    except TruncatedPduError as e:
        log.warning('%s', e)
        ctx.emit('VIOLATION', 'PDU ended unexpectedly while reading %s!' % e.field, violation=True)
    return ctx.records
