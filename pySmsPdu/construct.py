from construct import *
from construct import Optional as COptional
from osmocom.construct import BcdAdapter

"""Declarative 'construct' definitions of the bit and octet layouts found in SMS T-PDUs."""

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

# first octet of every T-PDU; only the two lowest bits are common to all types
MessageTypeIndicator = BitStruct(Padding(6), 'tp_mti'/BitsInteger(2))

# 3GPP TS 23.040 Section 9.2.2.1
DeliverFlags = BitStruct('tp_rp'/Flag, 'tp_udhi'/Flag, 'tp_sri'/Flag, Padding(1),
                         'tp_lp'/Flag, 'tp_mms'/Flag, 'tp_mti'/BitsInteger(2))

# 3GPP TS 23.040 Section 9.2.2.2
SubmitFlags = BitStruct('tp_rp'/Flag, 'tp_udhi'/Flag, 'tp_srr'/Flag,
                        'tp_vpf'/Enum(BitsInteger(2), none=0, enhanced=1, relative=2, absolute=3),
                        'tp_rd'/Flag, 'tp_mti'/BitsInteger(2))

# 3GPP TS 23.038 Section 4, coding groups 00xx
DcsGeneral = BitStruct(Padding(2), 'compressed'/Flag, 'has_class'/Flag,
                       'alphabet'/Enum(BitsInteger(2), default=0, eight_bit=1, ucs2=2, reserved=3),
                       'message_class'/BitsInteger(2))

# 3GPP TS 23.038 Section 4, coding groups 1100..1110
DcsMessageWaiting = BitStruct('group'/BitsInteger(4), 'active'/Flag, 'reserved'/Flag,
                              'indication'/Enum(BitsInteger(2), voicemail=0, fax=1, email=2, other=3))

# 3GPP TS 23.038 Section 4, coding group 1111
DcsMessageClass = BitStruct(Padding(4), 'reserved'/Flag, 'eight_bit'/Flag, 'message_class'/BitsInteger(2))

# 3GPP TS 23.040 Section 9.2.3.11; the timezone is kept raw as its sign lives inside a nibble
Scts = Struct('year'/BcdAdapter(Bytes(1)),
              'month'/BcdAdapter(Bytes(1)),
              'day'/BcdAdapter(Bytes(1)),
              'hour'/BcdAdapter(Bytes(1)),
              'minute'/BcdAdapter(Bytes(1)),
              'second'/BcdAdapter(Bytes(1)),
              'timezone'/Int8ub)

# 3GPP TS 23.040 Section 9.2.3.12.3
VpEnhancedIndicator = BitStruct('extension'/Flag, 'single_shot'/Flag, Padding(3),
                                'format'/Enum(BitsInteger(3), none=0, relative=1, seconds=2,
                                              hhmmss=3))

# 3GPP TS 23.040 Section 9.2.3.24.1
ConcatIE = Struct('ref'/Int8ub, 'count'/Int8ub, 'seq'/Int8ub)
# 3GPP TS 23.040 Section 9.2.3.24.8
Concat16IE = Struct('ref'/Int16ub, 'count'/Int8ub, 'seq'/Int8ub)
# 3GPP TS 23.040 Section 9.2.3.24.3
Port8IE = Struct('dest_port'/Int8ub, 'src_port'/Int8ub)
# 3GPP TS 23.040 Section 9.2.3.24.4
Port16IE = Struct('dest_port'/Int16ub, 'src_port'/Int16ub)

# 3GPP TS 23.040 Section 9.2.3.24.10.1.1
EmsTextFormat = BitStruct('strikethrough'/Flag, 'underline'/Flag, 'italic'/Flag, 'bold'/Flag,
                          'font_size'/Enum(BitsInteger(2), normal=0, large=1, small=2, reserved=3),
                          'alignment'/Enum(BitsInteger(2), left=0, center=1, right=2,
                                           language_dependent=3))
EmsTextColor = BitStruct('background'/BitsInteger(4), 'foreground'/BitsInteger(4))
EmsTextFormattingIE = Struct('start'/Int8ub, 'length'/Int8ub, 'format'/EmsTextFormat,
                             'color'/COptional(EmsTextColor))
