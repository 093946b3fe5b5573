import unittest

from pydantic import SecretStr

from groupme_relay.util.functions import mask_secret


class FunctionsTest(unittest.TestCase):

    def test_mask_secret_none(self):
        self.assertIsNone(mask_secret(None))

    def test_mask_secret_short(self):
        self.assertEqual(mask_secret("abcd"), "****")

    def test_mask_secret_medium(self):
        self.assertEqual(mask_secret("abcdefg"), "a*****g")

    def test_mask_secret_long(self):
        self.assertEqual(mask_secret("1My7L658ugPeMzRL"), "1My*****zRL")

    def test_mask_secret_from_secret_str(self):
        self.assertEqual(mask_secret(SecretStr("abcdefghijkl"), mask = "#"), "abc#####jkl")
