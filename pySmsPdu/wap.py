# -*- coding: utf-8 -*-

"""Decoding of WAP Push messages carried in the user data of a SMS (WDP datagrams):
the WSP push header is decoded here, the WBXML body is handed to an external decoder.
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

import abc
import time
from typing import Optional, List

import requests
from osmocom.utils import b2h

from pySmsPdu.exceptions import WbxmlDecodeError
from pySmsPdu.fields import FieldRecord
from pySmsPdu.log import PduLogger
from pySmsPdu.utils import ascii_guess

log = PduLogger.get(__name__)

# upper bound for the call into the external WBXML decoder
WBXML_TIMEOUT_MS = 1000

WSP_PDU_TYPE_PUSH = 0x06

# WAP-230-WSP, well-known values in short-integer encoding (high bit stripped)
WSP_WELL_KNOWN = {
    0x01: '; charset=',
    0x2E: 'application/vnd.wap.sic',
    0x30: 'application/vnd.wap.slc',
    0x6A: 'UTF-8',
}


class WbxmlDecoder(abc.ABC):
    """Client side of an external WBXML to XML decoder."""

    @abc.abstractmethod
    def decode(self, body: bytes, timeout_ms: int = WBXML_TIMEOUT_MS) -> str:
        """Decode a WBXML document into XML markup.

        Args:
            body : the WBXML encoded document
            timeout_ms : time after which the decoding is given up
        Returns:
            the XML markup
        Raises:
            WbxmlDecodeError on any failure, including a timeout
        """


class HttpWbxmlDecoder(WbxmlDecoder):
    """WBXML decoder reachable via HTTP. The body is passed hex encoded in the 'octets'
    query parameter, the response body is the decoded markup.

    requests applies its timeout to the connect and to every single read, not to the
    whole call. The response body is therefore streamed, and reading it is given up
    once timeout_ms have passed since the request was sent."""

    def __init__(self, url: str, session: Optional[requests.Session] = None):
        self.url = url
        self.session = session or requests.Session()

    def decode(self, body: bytes, timeout_ms: int = WBXML_TIMEOUT_MS) -> str:
        params = {'octets': b2h(body).upper()}
        deadline = time.monotonic() + timeout_ms / 1000
        log.debug("HTTP REQ %s - params: %s", self.url, params)
        try:
            response = self.session.get(self.url, params=params, timeout=timeout_ms / 1000,
                                        headers={'Cache-Control': 'no-cache'}, stream=True)
        except requests.RequestException as e:
            raise WbxmlDecodeError('request to %s failed: %s' % (self.url, e)) from e
        with response:
            log.debug("HTTP RSP-STS: [%u]", response.status_code)
            if response.status_code != 200:
                raise WbxmlDecodeError('%s returned HTTP status %u' % (self.url, response.status_code))
            content = b''
            try:
                for chunk in response.iter_content(chunk_size=1024):
                    if time.monotonic() > deadline:
                        raise WbxmlDecodeError('%s did not respond within %u ms' % (self.url, timeout_ms))
                    content += chunk
            except requests.RequestException as e:
                raise WbxmlDecodeError('reading response of %s failed: %s' % (self.url, e)) from e
        log.debug("HTTP RSP: %s", content)
        return content.decode(response.encoding or 'utf-8', errors='replace')


def decode_wsp_type(octet: int) -> str:
    if octet == WSP_PDU_TYPE_PUSH:
        return 'Push'
    return 'unknown'


def decode_wsp_headers(data: bytes) -> str:
    """Decode the headers of a WSP push PDU, as far as they are understood.

    An octet 1..31 starts a new header field; its value is the number of octets
    belonging to the field (31: the number is in the next octet). Octets 32..127
    are text, octets from 128 are well-known values in short-integer encoding. The
    first field is always the Content-Type.

    Returns:
        the header fields as 'Key: value', separated by ', '
    """
    headers = []
    current = None
    it = iter(data)
    for o in it:
        if 0 < o < 32:
            if current is not None:
                # previous field did not get all of its octets
                headers.append(current)
            length = o
            if o == 31:
                length = next(it, 0)
            current = {'key': 'Content-Type' if not headers else '', 'value': '', 'pos': 0, 'length': length}
            if length:
                continue
        elif current is None:
            log.debug('dropping octet 0x%02x outside of any WSP header field', o)
            continue
        elif o == 0:
            current['pos'] += 1
        elif o < 128:
            current['value'] += chr(o)
            current['pos'] += 1
        else:
            well_known = WSP_WELL_KNOWN.get(o & 0x7f)
            if well_known is None:
                log.debug('unknown well-known WSP value 0x%02x', o & 0x7f)
            else:
                current['value'] += well_known
            current['pos'] += 1
        if current['pos'] >= current['length']:
            headers.append(current)
            current = None
    if current is not None:
        headers.append(current)

    fields = []
    for h in headers:
        if h['key']:
            fields.append('%s: %s' % (h['key'], h['value']))
        else:
            fields.append(h['value'])
    return ', '.join(fields)


def decode_wbxml(body: bytes, wbxml_decoder: Optional[WbxmlDecoder] = None,
                 timeout_ms: int = WBXML_TIMEOUT_MS) -> str:
    """Decode the WBXML body of a WAP push message through the external decoder.

    In case there is no decoder, it fails in any way, or it returns something that does
    not look like markup, the body is rendered as hex followed by its ASCII interpretation.
    """
    if wbxml_decoder is not None:
        try:
            markup = wbxml_decoder.decode(body, timeout_ms)
        except Exception as e:
            log.warning('WBXML decoding failed, falling back to ASCII: %s', e)
        else:
            if isinstance(markup, str) and '<' in markup:
                return markup
            log.warning('WBXML decoder returned no markup, falling back to ASCII')
    return b2h(body).upper() + ' (Could not be decoded, try ASCII decoding)' + ascii_guess(body)


def decode_wap(data: bytes, wbxml_decoder: Optional[WbxmlDecoder] = None,
               timeout_ms: int = WBXML_TIMEOUT_MS) -> List[FieldRecord]:
    """Decode a connectionless WSP push PDU: transaction id, PDU type, headers and body.

    Args:
        data : the user data octets (without the user data header)
        wbxml_decoder : decoder for the WBXML body, None to always use the ASCII fallback
        timeout_ms : passed on to the WBXML decoder
    Returns:
        list of FieldRecord
    """
    records = []
    if len(data) < 1:
        return [FieldRecord('VIOLATION', 'WAP message ended unexpectedly!', violation=True)]
    records.append(FieldRecord('WSP Transaction ID', '0x%02X' % data[0]))
    if len(data) < 3:
        records.append(FieldRecord('VIOLATION', 'WAP message ended unexpectedly!', violation=True))
        return records
    records.append(FieldRecord('Type', decode_wsp_type(data[1])))
    header_len = data[2]
    header = data[3:3+header_len]
    records.append(FieldRecord('Wireless Session Protocol', decode_wsp_headers(header)))
    if len(header) < header_len:
        records.append(FieldRecord('VIOLATION', 'WSP header ended unexpectedly!', violation=True))
        return records
    records.append(FieldRecord('WAP Binary XML', decode_wbxml(data[3+header_len:], wbxml_decoder, timeout_ms)))
    return records
