#!/usr/bin/env python
# -*- coding: utf-8 -*-

import binascii
from binascii import unhexlify
import unittest

from amethyst_glue.bcn import crypto
from amethyst_glue.bcn.sub.seed import SeedDerivation, bip44_path
from amethyst_glue.misc.bip import bip32, bip39_deriv
from amethyst_glue.misc.bip.bip32 import HARDENED


class BipTest(unittest.TestCase):
    """BIP-32 / BIP-39 derivation"""

    def __init__(self, *args, **kwargs):
        super(BipTest, self).__init__(*args, **kwargs)

    def test_bip32_vector1(self):
        """
        https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki#test-vector-1
        """
        seed = unhexlify(b"000102030405060708090a0b0c0d0e0f")
        master = bip32.Bip32Key.create_master_key(seed)
        self.assertEqual(
            binascii.hexlify(master.get_priv_key()),
            b"e8f32e723decf4051aefac8e2c93c9c5b214313817cdb01a1494b917c8436b35",
        )
        self.assertEqual(
            binascii.hexlify(master.chain_code),
            b"873dff81c02f525623fd1fe5167eac3a55a049de3d314bb42ee227ffed37d508",
        )

        k = master.derive_key(HARDENED | 0)
        self.assertEqual(
            binascii.hexlify(k.get_priv_key()),
            b"edb2e14f9ee77d26dd93b4ecede8d16ed408ce149b6cd80b0715a2d911a0afea",
        )
        self.assertEqual(k.depth, 1)

        k2 = master.derive_path(bip32.parse_path("m/0'/1"))
        self.assertEqual(
            binascii.hexlify(k2.get_priv_key()),
            b"3c6cb8d0f6a264c91ea8b5030fadaa8e538b020f0a387421a12de9319dc93368",
        )

    def test_parse_path(self):
        self.assertEqual(
            bip32.parse_path("m/44'/204'/1'/0/0"),
            [HARDENED | 44, HARDENED | 204, HARDENED | 1, 0, 0],
        )
        self.assertEqual(bip32.parse_path("m"), [])
        self.assertEqual(bip44_path(1), bip32.parse_path("m/44'/204'/1'/0/0"))
        with self.assertRaises(ValueError):
            bip32.parse_path("44'/0")

    def test_bip39_seed(self):
        words = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"
        self.assertTrue(bip39_deriv.check_mnemonics(words))
        self.assertEqual(
            binascii.hexlify(bip39_deriv.mnemonics_to_seed(words, b"TREZOR")),
            b"c55257c360c07c72029aebc1b53c05ed0362ada38ead3e3e9efa3708e5349553"
            b"1f09a6987599d18264c1e1c92f2cf141630c7a3c4ab7c81b2f001698e7463b04",
        )

    def test_mnemonics_check(self):
        self.assertFalse(bip39_deriv.check_mnemonics(" ".join(["abandon"] * 12)))
        self.assertFalse(
            bip39_deriv.check_mnemonics(" ".join(["abandon"] * 11 + ["notaword"]))
        )

    def test_normalize(self):
        self.assertEqual(
            bip39_deriv.normalize_mnemonics("  Abandon   ABOUT "), "abandon about"
        )
        self.assertEqual(
            bip39_deriv.normalize_mnemonics(["abandon about", "Zoo"]), "abandon about zoo"
        )

    def test_seed_derivation(self):
        words = "abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon abandon about"
        sd = SeedDerivation.from_mnemonics(words)
        self.assertEqual(sd.path, bip44_path(1))

        master = bip32.Bip32Key.create_master_key(bip39_deriv.mnemonics_to_seed(words))
        k4 = master.derive_path(bip44_path(1))
        self.assertEqual(sd.pre_hash, k4.get_priv_key())
        self.assertEqual(sd.seed, crypto.cn_fast_hash(k4.get_priv_key()))
        self.assertEqual(
            SeedDerivation.from_master_seed(sd.master_seed).seed, sd.seed
        )

        sd0 = SeedDerivation.from_mnemonics(words, address_type=0)
        self.assertNotEqual(sd.seed, sd0.seed)

        self.assertIsNone(SeedDerivation.from_mnemonics(" ".join(["abandon"] * 12)))


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
