#!/usr/bin/env python
# -*- coding: utf-8 -*-

from amethyst_glue.bcn import crypto
from amethyst_glue.misc.bip import bip32, bip39_deriv
from amethyst_glue.misc.bip.bip32 import HARDENED


BIP44_PURPOSE = 44
BCN_COIN_TYPE = 0xCC  # 204


def bip44_path(address_type):
    """
    m/44'/204'/address_type'/0/0
    :param address_type:
    :return:
    """
    return [
        HARDENED | BIP44_PURPOSE,
        HARDENED | BCN_COIN_TYPE,
        HARDENED | address_type,
        0,
        0,
    ]


class SeedDerivation(object):
    def __init__(self):
        self.mnemonics = None
        self.master_seed = None
        self.path = None
        self.pre_hash = None
        self.seed = None

    def set_seed(self, master_seed, address_type=1):
        """
        Sets BIP39 master secret, derives the device seed over BIP44 path.
        Ledger way = words -> bip39 pbkdf -> master seed -> bip32 with
        "Bitcoin seed" key, child private key -> cn_fast_hash -> device seed

        :param master_seed:
        :param address_type:
        :return:
        """
        self.master_seed = master_seed
        self.path = bip44_path(address_type)

        master_key = bip32.Bip32Key.create_master_key(master_seed)
        child = master_key.derive_path(self.path)
        self.pre_hash = child.get_priv_key()
        self.seed = crypto.cn_fast_hash(self.pre_hash)
        return self

    @classmethod
    def from_mnemonics(cls, mnemonics, address_type=1, passphrase=b""):
        """
        Validates the mnemonic checksum and derives the device seed.
        Returns None on invalid checksum, the caller decides how to fail.

        :param mnemonics:
        :param address_type:
        :param passphrase:
        :return:
        """
        words = bip39_deriv.normalize_mnemonics(mnemonics)
        if not bip39_deriv.check_mnemonics(words):
            return None

        r = cls()
        r.mnemonics = words
        r.set_seed(bip39_deriv.mnemonics_to_seed(words, passphrase), address_type)
        return r

    @classmethod
    def from_master_seed(cls, master_seed, address_type=1):
        r = cls()
        r.set_seed(master_seed, address_type)
        return r
