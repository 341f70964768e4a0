#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Pure python Ed25519 scalars and points for the Bytecoin primitives.
# Scalars are kept reduced mod l, points in extended coordinates.

import binascii

from Crypto.Hash import keccak
from Crypto.Random import random as rand

from amethyst_glue.bcn.core.backend import ed25519
from amethyst_glue.bcn.core.ec_base import *


class EdScalar(object):
    """
    Element of Z_l. Constructed from an int, another scalar or
    32 B little endian encoding (optionally at offset).
    """

    def __init__(self, v=None, offset=0):
        if v is None:
            self.v = 0
        elif isinstance(v, EdScalar):
            self.v = v.v
        elif isinstance(v, int):
            self.v = v % l
        else:
            self.v = ed25519.decodeint(v[offset:]) % l

    @staticmethod
    def wrap(x):
        return x if isinstance(x, EdScalar) else EdScalar(x)

    def _operand(self, other):
        if not isinstance(other, EdScalar):
            raise ValueError("Scalar operand expected, got %s" % type(other).__name__)
        return other.v

    def __repr__(self):
        return "EdScalar(%s)" % binascii.hexlify(bytes(self)).decode("ascii")

    def __bytes__(self):
        return ed25519.encodeint(self.v)

    def __hash__(self):
        return hash(self.v)

    def __eq__(self, other):
        if isinstance(other, int):
            return self.v == other % l
        return self.v == self._operand(other)

    def __neg__(self):
        return EdScalar(-self.v)

    def __add__(self, other):
        return EdScalar(self.v + self._operand(other))

    def __sub__(self, other):
        return EdScalar(self.v - self._operand(other))

    def __mul__(self, other):
        if isinstance(other, EdPoint):
            return other * self
        return EdScalar(self.v * self._operand(other))

    def modinv(self):
        """
        In place inversion, l is prime
        :return: self
        """
        if self.v == 0:
            raise ValueError("Zero scalar has no inverse")
        self.v = pow(self.v, l - 2, l)
        return self


class EdPoint(object):
    """
    Curve point. Constructed from extended coordinates, another point or
    32 B compressed encoding. Decoding rejects points off the curve.
    """

    def __init__(self, v=None, offset=0):
        if v is None:
            self.v = ed25519.ident
        elif isinstance(v, EdPoint):
            self.v = v.v
        elif isinstance(v, tuple):
            self.v = v
        else:
            self.v = ed25519.decodepoint(v[offset:])

    def _operand(self, other):
        if not isinstance(other, EdPoint):
            raise ValueError("Point operand expected, got %s" % type(other).__name__)
        return other.v

    def __repr__(self):
        return "EdPoint(%s)" % binascii.hexlify(bytes(self)).decode("ascii")

    def __bytes__(self):
        return ed25519.encodepoint(self.v)

    def __hash__(self):
        return hash(bytes(self))

    def __eq__(self, other):
        if isinstance(other, tuple):
            return ed25519.point_equal(self.v, other)
        return ed25519.point_equal(self.v, self._operand(other))

    def check(self):
        if not ed25519.isoncurve(self.v):
            raise ValueError("Point is not on the curve")

    def __neg__(self):
        return EdPoint(ed25519.point_neg(self.v))

    def __add__(self, other):
        return EdPoint(ed25519.edwards_add(self.v, self._operand(other)))

    def __sub__(self, other):
        return EdPoint(ed25519.edwards_add(self.v, ed25519.point_neg(self._operand(other))))

    def __mul__(self, other):
        return EdPoint(ed25519.scalarmult(self.v, EdScalar.wrap(other).v))

    __rmul__ = __mul__


BASE = EdPoint(ed25519.B)


#
# Encoding
#


def decodeint(x, offset=0):
    return EdScalar(x, offset)


def encodeint(x):
    return bytes(x)


def decodepoint(b, offset=0):
    return EdPoint(b, offset)


def encodepoint(P):
    return bytes(P)


def check_ed25519point(P):
    P.check()


def point_eq(P, Q):
    P.check()
    Q.check()
    return P == Q


#
# Scalars
#


def sc_0():
    return EdScalar(0)


def sc_init(x):
    if x >= (1 << 64):
        raise ValueError("Only 64-bit initializers are allowed")
    return EdScalar(x)


def check_sc(key):
    """
    Raises on the zero scalar, the value is already reduced
    :param key:
    :return:
    """
    if key.v == 0:
        raise ValueError("Invalid scalar value")


def sc_add(aa, bb):
    return aa + bb


def sc_sub(aa, bb):
    return aa - bb


def sc_isnonzero(c):
    return c.v != 0


def sc_eq(a, b):
    return a == b


def sc_mul(a, b):
    return a * b


def sc_mulsub(aa, bb, cc):
    """
    cc - aa * bb
    """
    return cc - aa * bb


def sc_muladd(aa, bb, cc):
    """
    cc + aa * bb
    """
    return cc + aa * bb


def sc_inv(aa):
    return EdScalar(aa).modinv()


def random_scalar():
    return EdScalar(rand.getrandbits(512))


#
# Group
#


def scalarmult_base(a):
    return EdPoint(ed25519.scalarmult_B(EdScalar.wrap(a).v))


def scalarmult(P, e):
    return P * e


def point_add(A, B):
    return A + B


def point_sub(A, B):
    return A - B


def point_mul8(P):
    v = P.v
    for _ in range(3):
        v = ed25519.edwards_double(v)
    return EdPoint(v)


#
# Hashing
#


def cn_fast_hash(buff):
    """
    Keccak-256 with the original padding (pre SHA3)
    :param buff:
    :return: 32 B digest
    """
    return keccak.new(data=bytes(buff), digest_bits=256).digest()


def hash_to_scalar(data, length=None):
    """
    H_s(data), digest reduced mod l
    :param data:
    :param length: hash only the prefix of this length
    :return:
    """
    return decodeint(cn_fast_hash(data if length is None else data[:length]))


def ge_fromfe_frombytes(u):
    """
    Elligator style map of the field element u to a curve point,
    ge_fromfe_frombytes_vartime of the CryptoNote reference code.
    https://github.com/monero-project/research-lab/blob/master/whitepaper/ge_fromfe_writeup/ge_fromfe.pdf

    :param u: field element
    :return: EdPoint, not multiplied by the cofactor
    """
    w = (2 * u * u + 1) % q
    x = (w * w - 2 * fe_A * fe_A * u * u) % q

    rx = ed25519.expmod(w * ed25519.inv(x), (q + 3) // 8, q)
    x = rx * rx * x % q

    if (w - x) % q == 0:
        negative = False
        rx = rx * fe_fffb2 % q
    elif (w + x) % q == 0:
        negative = False
        rx = rx * fe_fffb1 % q
    else:
        negative = True

    if negative:
        x = x * fe_sqrtm1 % q
        rx = rx * (fe_fffb3 if (w - x) % q != 0 else fe_fffb4) % q
        z = -fe_A
        sign = 1
    else:
        rx = rx * u % q
        z = -2 * fe_A * u * u % q
        sign = 0

    if rx % 2 != sign:
        rx = -rx % q

    rz = (z + w) % q
    ry = (z - w) % q
    rx = rx * rz % q
    rt = rx * ry % q * ed25519.inv(rz) % q
    return EdPoint((rx, ry, rz, rt))


def hash_to_point(buf):
    """
    H_p(buf), the hash mapped to the curve and multiplied by the cofactor
    :param buf:
    :return:
    """
    u = ed25519.decodeint(cn_fast_hash(buf)) % q
    return point_mul8(ge_fromfe_frombytes(u))


#
# H, second generator with unknown discrete log w.r.t. G
#


H_ENC = b"\x8b\x65\x59\x70\x15\x37\x99\xaf\x2a\xea\xdc\x9f\xf1\xad\xd0\xea\x6c\x72\x51\xd5\x41\x54\xcf\xa9\x2c\x17\x3a\x0d\xd3\x9c\x1f\x94"
H_PT = EdPoint(H_ENC)


def compute_H():
    """
    H = 8 * to_point(cn_fast_hash(G))
    :return:
    """
    return point_mul8(decodepoint(cn_fast_hash(encodepoint(BASE))))


def get_H():
    return EdPoint(H_PT)


def scalarmult_h(i):
    return H_PT * EdScalar.wrap(i)
