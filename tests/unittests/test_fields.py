#!/usr/bin/env python3

import unittest
from osmocom.utils import h2b
from pySmsPdu.fields import *

class Test_Number(unittest.TestCase):
    def test_even(self):
        self.assertEqual(decode_number(b'\x21\x43', 4), ('1234', False))

    def test_padded_with_f(self):
        self.assertEqual(decode_number(h2b('2143f5'), 5), ('12345', False))

    def test_padded_without_length(self):
        self.assertEqual(decode_number(h2b('7283010010f5')), ('27381000015', False))

    def test_bad_padding(self):
        number, violation = decode_number(h2b('214365'), 5)
        self.assertTrue(violation)
        self.assertEqual(number, '12345 (VIOLATION: number not padded with "F" but with "6"!)')

    def test_bad_padding_nibble(self):
        number, violation = decode_number(h2b('e5'))
        self.assertTrue(violation)
        self.assertEqual(number, '5 (VIOLATION: number not padded with "F" but with "E"!)')

class Test_ToA(unittest.TestCase):
    def test_international(self):
        self.assertEqual(decode_toa(0x91),
                         ('International number, ISDN/telephone numbering plan (E.164/E.163)', False))

    def test_national(self):
        self.assertEqual(decode_toa(0xC8), ('Subscriber number, National numbering plan', False))

    def test_missing_high_bit(self):
        text, violation = decode_toa(0x11)
        self.assertTrue(violation)
        self.assertTrue(text.endswith('(VIOLATION: Highest bit should always be set!)'))

    def test_reserved_npi(self):
        text, violation = decode_toa(0x82)
        self.assertEqual(text, 'Unknown type of address, Reserved numbering plan')
        self.assertFalse(violation)

    def test_telex(self):
        self.assertEqual(decode_toa(0x94), ('International number, Telex numbering plan', False))

    def test_service_centre_specific_npi(self):
        for toa in (0x85, 0x86, 0x8B):
            with self.subTest(toa=toa):
                self.assertEqual(decode_toa(toa), ('Unknown type of address, Reserved numbering plan', False))

    def test_alphanumeric(self):
        self.assertTrue(is_alphanumeric(0xD0))
        self.assertFalse(is_alphanumeric(0x91))

class Test_ToM(unittest.TestCase):
    def test_deliver_no_flags(self):
        pt = decode_tom(0x04)
        self.assertTrue(pt.is_deliver)
        self.assertFalse(pt.udhi)
        self.assertEqual(pt.info, 'SMS-DELIVER')

    def test_deliver_flags(self):
        pt = decode_tom(0x40)
        self.assertTrue(pt.udhi)
        self.assertEqual(pt.info, 'SMS-DELIVER, Flags: TP-UDHI (User data header indicator), '
                                  'TP-MMS (More messages to send)')

    def test_deliver_reply_path(self):
        pt = decode_tom(0xA4)
        self.assertEqual(pt.flags, ['TP-RP (Reply path exists)', 'TP-SRI (Status report indication)'])

    def test_submit_relative(self):
        pt = decode_tom(0x11)
        self.assertTrue(pt.is_submit)
        self.assertEqual(pt.vpf, 'relative')
        self.assertEqual(pt.info, 'SMS-SUBMIT, Flags: TP-VPF (Validity Period Format): relative format')

    def test_submit_no_vp(self):
        pt = decode_tom(0x01)
        self.assertIsNone(pt.vpf)
        self.assertEqual(pt.info, 'SMS-SUBMIT')

    def test_submit_flags(self):
        pt = decode_tom(0x65)
        self.assertTrue(pt.udhi)
        self.assertEqual(pt.flags, ['TP-UDHI (User data header indicator)', 'TP-SRR (Status report request)',
                                    'TP-RD (Reject duplicates)'])

    def test_other_types(self):
        pt = decode_tom(0x02)
        self.assertIsNone(pt.name)
        self.assertEqual(pt.info, 'SMS-STATUS-REPORT or SMS-COMMAND (not supported)')
        pt = decode_tom(0x03)
        self.assertEqual(pt.info, 'Reserved message type (not supported)')

class Test_PID(unittest.TestCase):
    def test_sme_to_sme(self):
        self.assertEqual(decode_pid(0x00), 'SME-to-SME protocol')

    def test_sm_al(self):
        self.assertTrue(decode_pid(0x05).startswith('SME-to-SME protocol (Unknown bitmask: 101'))

    def test_telematic(self):
        self.assertEqual(decode_pid(0x21), 'Telematic interworking (Type: telex)')
        self.assertEqual(decode_pid(0x32), 'Telematic interworking (Type: Internet E-Mail)')
        self.assertEqual(decode_pid(0x3A), 'Telematic interworking (Type: SC specific value)')

    def test_short_message(self):
        self.assertEqual(decode_pid(0x41), 'Short Message Type 1')
        self.assertEqual(decode_pid(0x7F), 'SIM Data download')
        self.assertEqual(decode_pid(0x50), 'reserved')

    def test_upper_groups(self):
        self.assertEqual(decode_pid(0x80), 'reserved')
        self.assertEqual(decode_pid(0xC0), 'SC specific use')

class Test_DCS(unittest.TestCase):
    def test_default(self):
        dcs = decode_dcs(0x00)
        self.assertEqual(dcs.alphabet, Alphabet.DEFAULT)
        self.assertIsNone(dcs.message_class)
        self.assertEqual(dcs.info, 'General Data Coding groups, uncompressed, default alphabet, no message '
                                   'class set (but given bits would be: Class 0 - immediate display)')

    def test_ucs2(self):
        self.assertEqual(decode_dcs(0x08).alphabet, Alphabet.UCS2)

    def test_eight_bit_with_class(self):
        dcs = decode_dcs(0x15)
        self.assertEqual(dcs.alphabet, Alphabet.EIGHT_BIT)
        self.assertEqual(dcs.message_class, 1)
        self.assertEqual(dcs.info, 'General Data Coding groups, uncompressed, 8 bit data, Class 1 - ME specific')

    def test_compressed(self):
        dcs = decode_dcs(0x20)
        self.assertTrue(dcs.compressed)
        self.assertIn('compressed, default alphabet', dcs.info)

    def test_reserved_alphabet(self):
        self.assertEqual(decode_dcs(0x0C).alphabet, Alphabet.RESERVED)

    def test_reserved_group(self):
        self.assertEqual(decode_dcs(0x40).info, 'Reserved coding groups')

    def test_message_waiting(self):
        dcs = decode_dcs(0xC8)
        self.assertEqual(dcs.alphabet, Alphabet.DEFAULT)
        self.assertEqual(dcs.info, 'Message Waiting Indication Group: Discard Message, Set Indication Active, '
                                   'Voicemail Message Waiting')

    def test_message_waiting_ucs2(self):
        dcs = decode_dcs(0xE2)
        self.assertEqual(dcs.alphabet, Alphabet.UCS2)
        self.assertTrue(dcs.info.endswith('E-Mail Message Waiting'))

    def test_message_class(self):
        dcs = decode_dcs(0xF4)
        self.assertEqual(dcs.alphabet, Alphabet.EIGHT_BIT)
        self.assertEqual(dcs.message_class, 0)
        self.assertFalse(dcs.violation)
        self.assertEqual(dcs.info, 'Data coding/message class, 8 bit data, Class 0 - immediate display')

    def test_message_class_reserved_bit(self):
        dcs = decode_dcs(0xF8)
        self.assertTrue(dcs.violation)

class Test_SCTS(unittest.TestCase):
    def test_zero(self):
        self.assertEqual(decode_scts(bytes(7)), '2000-00-00 00:00:00 GMT +0')

    def test_positive_tz(self):
        self.assertEqual(decode_scts(h2b('99309251619580')), '1999-03-29 15:16:59 GMT +2')

    def test_negative_tz(self):
        self.assertEqual(decode_scts(h2b('2101013254000a')), '2012-10-10 23:45:00 GMT -5')

    def test_quarter_hour_tz(self):
        self.assertEqual(decode_scts(h2b('21010132540022')), '2012-10-10 23:45:00 GMT +5.5')

    def test_filler_nibble(self):
        self.assertEqual(decode_scts(h2b('2f000000000000')), '20F2-00-00 00:00:00 GMT +0')

class Test_Lengths(unittest.TestCase):
    def test_udl_default(self):
        udl = decode_udl(0x0A, Alphabet.DEFAULT)
        self.assertEqual(udl.octets, 9)
        self.assertEqual(udl.info, '10 characters, 9 bytes')

    def test_udl_ucs2(self):
        udl = decode_udl(0x0A, Alphabet.UCS2)
        self.assertEqual(udl.octets, 10)
        self.assertEqual(udl.chars, 5)

    def test_udl_eight_bit(self):
        self.assertEqual(decode_udl(7, Alphabet.EIGHT_BIT).info, '7 characters, 7 bytes')

    def test_udhl_default(self):
        udhl = decode_udhl(5, Alphabet.DEFAULT)
        self.assertEqual(udhl.padding, 1)
        self.assertEqual(udhl.septets, 7)
        self.assertEqual(udhl.info, '5 bytes')
        udhl = decode_udhl(6, Alphabet.DEFAULT)
        self.assertEqual(udhl.padding, 0)
        self.assertEqual(udhl.septets, 8)

    def test_udhl_ucs2(self):
        self.assertEqual(decode_udhl(5, Alphabet.UCS2).padding, 0)

class Test_MR(unittest.TestCase):
    def test_mr(self):
        self.assertEqual(decode_mr(0), 'Mobile equipment sets reference number')
        self.assertEqual(decode_mr(0x1F), '0x1F')

class Test_VP(unittest.TestCase):
    def test_minutes(self):
        self.assertEqual(decode_vp_relative(0), '5 minutes')
        self.assertEqual(decode_vp_relative(143), '720 minutes')

    def test_hours(self):
        self.assertEqual(decode_vp_relative(144), '12.5 hours')
        self.assertEqual(decode_vp_relative(167), '24 hours')

    def test_days(self):
        self.assertEqual(decode_vp_relative(168), '2 days')
        self.assertEqual(decode_vp_relative(170), '4 days')

    def test_days_up_to_196(self):
        # values 187..196 are reported as days, following the literal range limits
        self.assertEqual(decode_vp_relative(187), '21 days')
        self.assertEqual(decode_vp_relative(196), '30 days')

    def test_weeks(self):
        self.assertEqual(decode_vp_relative(197), '5 weeks')
        self.assertEqual(decode_vp_relative(255), '63 weeks')

    def test_enhanced(self):
        self.assertEqual(decode_vp_enhanced(h2b('01aa0000000000')), 'enhanced format: 4 days')
        self.assertEqual(decode_vp_enhanced(h2b('023c0000000000')), 'enhanced format: 60 seconds')
        self.assertEqual(decode_vp_enhanced(h2b('03214365000000')), 'enhanced format: 12:34:56 hours')
        self.assertEqual(decode_vp_enhanced(h2b('40000000000000')),
                         'enhanced format: no validity period specified, single shot SM')

if __name__ == "__main__":
    unittest.main()
