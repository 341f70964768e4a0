#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Resources:
# https://cr.yp.to
# https://github.com/monero-project/mininero
# https://github.com/bcndev/bytecoin (crypto.cpp, amethyst)

from amethyst_glue.bcn import common
from amethyst_glue.bcn.core.ec_py import *


def public_key(sk):
    """
    Creates public key from the private key (integer scalar)
    Returns encoded point
    :param sk:
    :return:
    """
    return encodepoint(scalarmult_base(sk))


def secret_key_to_public_key(sec):
    """
    sec * G
    :param sec:
    :return:
    """
    check_sc(sec)
    return scalarmult_base(sec)


def secret_keys_to_public_key(sec_a, sec_s):
    """
    Amethyst output key, a*G + s*H
    :param sec_a: audit part of the secret
    :param sec_s: spend part of the secret
    :return:
    """
    return point_add(scalarmult_base(sec_a), scalarmult_h(sec_s))


def hash_to_good_point(data):
    """
    Hash to a point in the prime order subgroup
    :param data:
    :return:
    """
    return hash_to_point(data)


def generate_key_image(pub, sec):
    """
    I = sec * H_p(pub)
    :param pub: output public key, EdPoint
    :param sec: output secret (audit part), EdScalar
    :return:
    """
    return scalarmult(hash_to_good_point(encodepoint(pub)), sec)


def generate_hd_secretkey(a0, A_plus_sH, index):
    """
    Subaddress secret key derivation,
    a0 + H_s(A_plus_sH || "address" || varint(index))

    :param a0: audit key base secret key
    :param A_plus_sH: public base of the wallet
    :param index: subaddress index
    :return:
    """
    buff = encodepoint(A_plus_sH) + b"address" + common.dump_uvarint_b(index)
    return sc_add(hash_to_scalar(buff), a0)


def deterministic_keys_from_seed(tx_inputs_hash, tx_derivation_seed, add):
    """
    Deterministic key pair, secret = H_s(tx_derivation_seed || tx_inputs_hash || add)

    :param tx_inputs_hash:
    :param tx_derivation_seed:
    :param add: additional data, usually varint of the output index
    :return: (secret, public)
    """
    sec = hash_to_scalar(bytes(tx_derivation_seed) + bytes(tx_inputs_hash) + bytes(add))
    return sec, scalarmult_base(sec)


def generate_signature_H(prefix_hash, sec_H, sec):
    """
    Schnorr signature with H as a base point.
    Proves knowledge of sec such that sec_H = sec * H.

    :param prefix_hash: 32 B message hash
    :param sec_H: public key, sec * H
    :param sec: secret key
    :return: (c, r)
    """
    k = random_scalar()
    comm = scalarmult_h(k)

    buff = bytes(prefix_hash) + encodepoint(sec_H) + encodepoint(comm)
    c = hash_to_scalar(buff)
    r = sc_mulsub(c, sec, k)
    return c, r


def check_signature_H(prefix_hash, sec_H, c, r):
    """
    Verifies generate_signature_H signature.

    :param prefix_hash:
    :param sec_H:
    :param c:
    :param r:
    :return:
    """
    if not sc_isnonzero(c) and not sc_isnonzero(r):
        return False

    comm = point_add(scalarmult_h(r), scalarmult(sec_H, c))
    buff = bytes(prefix_hash) + encodepoint(sec_H) + encodepoint(comm)
    tmp_c = hash_to_scalar(buff)
    return not sc_isnonzero(sc_sub(tmp_c, c))
