#!/usr/bin/env python3

import unittest
from osmocom.utils import h2b
from pySmsPdu.fields import Alphabet
from pySmsPdu.udh import FormattingRule
from pySmsPdu.user_data import *

BOLD = ['font-weight: bold']
ITALIC = ['font-style: italic']

class Test_Alphabets(unittest.TestCase):
    def test_default(self):
        self.assertEqual(decode_user_data(h2b('e8329bfd4697d9ec37'), Alphabet.DEFAULT), 'hellohello')

    def test_default_count(self):
        self.assertEqual(decode_user_data(h2b('e8329bfd4697d9ec37'), Alphabet.DEFAULT, count=2), 'he')

    def test_ucs2(self):
        self.assertEqual(decode_user_data(h2b('00480069'), Alphabet.UCS2), 'Hi')
        self.assertEqual(decode_user_data(h2b('20ac'), Alphabet.UCS2), '€')

    def test_ucs2_surrogate_pair(self):
        self.assertEqual(decode_user_data(h2b('d83dde00'), Alphabet.UCS2), '\U0001f600')

    def test_ucs2_invalid(self):
        self.assertEqual(decode_user_data(h2b('d83d'), Alphabet.UCS2), '\ufffd')

    def test_eight_bit(self):
        self.assertEqual(decode_user_data(b'AB', Alphabet.EIGHT_BIT),
                         '(unknown binary data, try ASCII decoding) AB')

    def test_reserved(self):
        self.assertEqual(decode_user_data(b'AB', Alphabet.RESERVED),
                         '(unrecognized alphabet, try ASCII decoding) AB')

    def test_empty(self):
        self.assertEqual(decode_user_data(b'', Alphabet.DEFAULT), '')
        self.assertEqual(decode_user_data(b'', Alphabet.UCS2), '')

class Test_Formatting(unittest.TestCase):
    def test_single(self):
        self.assertEqual(apply_formatting('hello world', [FormattingRule(0, 5, BOLD)]),
                         '<span style="font-weight: bold">hello</span> world')

    def test_in_order(self):
        rules = [FormattingRule(6, 5, ITALIC), FormattingRule(0, 5, BOLD)]
        self.assertEqual(apply_formatting('hello world', rules),
                         '<span style="font-weight: bold">hello</span> '
                         '<span style="font-style: italic">world</span>')

    def test_first_occurrence(self):
        # the span is looked up literally, so an identical earlier span is wrapped instead
        self.assertEqual(apply_formatting('abab', [FormattingRule(2, 2, BOLD)]),
                         '<span style="font-weight: bold">ab</span>ab')

    def test_out_of_range(self):
        self.assertEqual(apply_formatting('hello', [FormattingRule(10, 5, BOLD)]), 'hello')

    def test_without_style(self):
        self.assertEqual(apply_formatting('hello', [FormattingRule(0, 5)]), 'hello')

    def test_with_decoding(self):
        self.assertEqual(decode_user_data(h2b('00480069'), Alphabet.UCS2, formatting=[FormattingRule(1, 1, BOLD)]),
                         'H<span style="font-weight: bold">i</span>')

if __name__ == "__main__":
    unittest.main()
