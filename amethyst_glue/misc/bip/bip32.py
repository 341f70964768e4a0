#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# BIP-32 private key derivation on secp256k1
# https://github.com/bitcoin/bips/blob/master/bip-0032.mediawiki

import hashlib
import hmac
import struct

from ecdsa import SECP256k1, SigningKey


HARDENED = 0x80000000
SECP256K1_N = SECP256k1.order


class Bip32Key(object):
    """
    Extended private key, (private key, chain code)
    """

    def __init__(self, priv_key=None, chain_code=None, depth=0):
        self.priv_key = priv_key  # type: bytes
        self.chain_code = chain_code  # type: bytes
        self.depth = depth

    def __repr__(self):
        return "Bip32Key(depth=%d)" % self.depth

    def get_priv_key(self):
        return self.priv_key

    def get_pub_key(self):
        """
        Compressed SEC1 public key
        :return:
        """
        sk = SigningKey.from_string(self.priv_key, curve=SECP256k1)
        return sk.get_verifying_key().to_string("compressed")

    @classmethod
    def create_master_key(cls, seed, key=b"Bitcoin seed"):
        I = hmac.new(key, msg=seed, digestmod=hashlib.sha512).digest()
        IL, IR = I[:32], I[32:]
        k = int.from_bytes(IL, "big")
        if k == 0 or k >= SECP256K1_N:
            raise ValueError("Invalid master key, use another seed")
        return cls(IL, IR, 0)

    def derive_key(self, index):
        """
        Child key derivation, CKDpriv
        :param index: child index, >= HARDENED for hardened derivation
        :return:
        """
        if index & HARDENED:
            data = b"\x00" + self.priv_key + struct.pack(">L", index)
        else:
            data = self.get_pub_key() + struct.pack(">L", index)

        I = hmac.new(self.chain_code, msg=data, digestmod=hashlib.sha512).digest()
        IL, IR = I[:32], I[32:]
        il = int.from_bytes(IL, "big")
        k = (il + int.from_bytes(self.priv_key, "big")) % SECP256K1_N
        if il >= SECP256K1_N or k == 0:
            raise ValueError("Invalid child key %s, use the next index" % index)
        return Bip32Key(k.to_bytes(32, "big"), IR, self.depth + 1)

    def derive_path(self, path):
        key = self
        for index in path:
            key = key.derive_key(index)
        return key


def parse_path(path):
    """
    Parses m/44'/204'/1'/0/0 to the list of indices
    :param path:
    :return:
    """
    parts = path.split("/")
    if parts[0] != "m":
        raise ValueError("Path has to start with m")

    res = []
    for part in parts[1:]:
        if part.endswith("'") or part.endswith("h") or part.endswith("H"):
            res.append(int(part[:-1]) | HARDENED)
        else:
            res.append(int(part))
    return res
