#!/usr/bin/env python3

import unittest
from pySmsPdu.exceptions import InvalidPduFormat
from pySmsPdu.utils import *

class Test_SplitOctets(unittest.TestCase):
    def test_valid(self):
        self.assertEqual(split_octets('a1B2'), b'\xa1\xb2')
        self.assertEqual(split_octets('00'), b'\x00')

    def test_immutable(self):
        self.assertIs(type(split_octets('0102')), bytes)

    def test_non_hex(self):
        with self.assertRaises(InvalidPduFormat):
            split_octets('0G')
        with self.assertRaises(InvalidPduFormat):
            split_octets('0011ZZ')

    def test_odd_length(self):
        with self.assertRaises(InvalidPduFormat):
            split_octets('0')
        with self.assertRaises(InvalidPduFormat):
            split_octets('001')

    def test_empty(self):
        with self.assertRaises(InvalidPduFormat):
            split_octets('')

    def test_whitespace_is_not_stripped(self):
        with self.assertRaises(InvalidPduFormat):
            split_octets('00 11')

    def test_error_is_value_error(self):
        with self.assertRaises(ValueError) as cm:
            split_octets('0G')
        self.assertTrue(str(cm.exception).startswith('Invalid PDU String!'))
        self.assertEqual(cm.exception.pdu, '0G')

class Test_Helpers(unittest.TestCase):
    def test_semi_octets(self):
        self.assertEqual(semi_octets(b'\x21\x43'), '1234')
        self.assertEqual(semi_octets(b'\x21\xf3'), '123F')

    def test_bcd_int(self):
        self.assertEqual(bcd_int('12'), 12)
        self.assertEqual(bcd_int('09'), 9)
        self.assertEqual(bcd_int('FF'), 0)

    def test_fmt_num(self):
        self.assertEqual(fmt_num(12.5), '12.5')
        self.assertEqual(fmt_num(13.0), '13')
        self.assertEqual(fmt_num(0), '0')

    def test_ascii_guess(self):
        self.assertEqual(ascii_guess(b'AB\x00'), 'AB\x00')
        self.assertEqual(ascii_guess(b''), '')

if __name__ == "__main__":
    unittest.main()
