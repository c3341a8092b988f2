# -*- coding: utf-8 -*-

""" pySmsPdu: Exceptions
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


class InvalidPduFormat(ValueError):
    """The input is not a hex string of even length."""

    def __init__(self, pdu: str, reason: str):
        """
        Args:
                pdu : the offending input string
                reason : human readable explanation of what is wrong with it
        """
        super().__init__(pdu, reason)
        self.pdu = pdu
        self.reason = reason

    def __str__(self):
        return "Invalid PDU String! %s" % self.reason


class TruncatedPduError(Exception):
    """A mandatory field could not be read because the PDU ended before it."""

    def __init__(self, field: str, offset: int):
        super().__init__(field, offset)
        self.field = field
        self.offset = offset

    def __str__(self):
        return "PDU ended unexpectedly while reading %s (octet %u)" % (self.field, self.offset)


class WbxmlDecodeError(Exception):
    """The external WBXML decoder failed or timed out."""
