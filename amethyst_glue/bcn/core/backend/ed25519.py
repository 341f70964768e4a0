#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Pure python ed25519 arithmetic, extended coordinates (X:Y:Z:T), x = X/Z, y = Y/Z, xy = T/Z.
# Based on the reference implementation https://ed25519.cr.yp.to/python/ed25519.py
# Not constant time! Emulator use only.

b = 256
q = 2 ** 255 - 19
l = 2 ** 252 + 27742317777372353535851937790883648493


def expmod(b, e, m):
    return pow(b, e, m)


def inv(x):
    return pow(x, q - 2, q)


d = -121665 * inv(121666) % q
d2 = 2 * d % q
I = expmod(2, (q - 1) // 4, q)


def xrecover(y, sign=0):
    """
    Recovers x coordinate from y and the sign bit.
    Raises ValueError if there is no such point.
    """
    xx = (y * y - 1) * inv(d * y * y + 1)
    x = expmod(xx, (q + 3) // 8, q)
    if (x * x - xx) % q != 0:
        x = (x * I) % q
    if (x * x - xx) % q != 0:
        raise ValueError("Point is not on the ed25519 curve")
    if x == 0 and sign:
        raise ValueError("Invalid point encoding, negative zero")
    if x & 1 != sign:
        x = q - x
    return x


By = 4 * inv(5) % q
Bx = xrecover(By)
B = (Bx % q, By % q, 1, (Bx * By) % q)
ident = (0, 1, 1, 0)


def edwards_add(P, Q):
    # add-2008-hwcd-3
    (x1, y1, z1, t1) = P
    (x2, y2, z2, t2) = Q

    a = (y1 - x1) * (y2 - x2) % q
    b_ = (y1 + x1) * (y2 + x2) % q
    c = t1 * d2 * t2 % q
    dd = 2 * z1 * z2 % q
    e = b_ - a
    f = dd - c
    g = dd + c
    h = b_ + a
    x3 = e * f
    y3 = g * h
    t3 = e * h
    z3 = f * g
    return x3 % q, y3 % q, z3 % q, t3 % q


def edwards_double(P):
    # dbl-2008-hwcd
    (x1, y1, z1, t1) = P

    a = x1 * x1 % q
    b_ = y1 * y1 % q
    c = 2 * z1 * z1 % q
    e = ((x1 + y1) * (x1 + y1) - a - b_) % q
    g = -a + b_
    f = g - c
    h = -a - b_
    x3 = e * f
    y3 = g * h
    t3 = e * h
    z3 = f * g
    return x3 % q, y3 % q, z3 % q, t3 % q


def point_neg(P):
    return (-P[0]) % q, P[1], P[2], (-P[3]) % q


def scalarmult(P, e):
    e = e % l
    R = ident
    while e > 0:
        if e & 1:
            R = edwards_add(R, P)
        P = edwards_double(P)
        e >>= 1
    return R


# Precomputed doublings of the base point, B * 2^i
_Bpow = []


def _make_Bpow():
    P = B
    for _ in range(253):
        _Bpow.append(P)
        P = edwards_double(P)


_make_Bpow()


def scalarmult_B(e):
    """
    Base point multiplication using the precomputed doubling table.
    """
    e = e % l
    R = ident
    for i in range(253):
        if e & 1:
            R = edwards_add(R, _Bpow[i])
        e >>= 1
    return R


def to_affine(P):
    (x, y, z, _) = P
    zi = inv(z)
    return x * zi % q, y * zi % q


def encodeint(y):
    return (y % (1 << b)).to_bytes(b // 8, "little")


def decodeint(s):
    return int.from_bytes(bytes(s[: b // 8]), "little")


def encodepoint(P):
    x, y = to_affine(P)
    return (y | ((x & 1) << (b - 1))).to_bytes(b // 8, "little")


def decodepoint(s):
    if len(s) < b // 8:
        raise ValueError("Point encoding has to be 32 bytes long")
    raw = decodeint(s)
    y = raw & ((1 << (b - 1)) - 1)
    if y >= q:
        raise ValueError("Non-canonical point encoding")
    x = xrecover(y, raw >> (b - 1))
    P = (x, y, 1, x * y % q)
    if not isoncurve(P):
        raise ValueError("Decoding point that is not on curve")
    return P


def isoncurve(P):
    (x, y, z, t) = P
    return (
        z % q != 0
        and x * y % q == z * t % q
        and (y * y - x * x - z * z - d * t * t) % q == 0
    )


def point_equal(P, Q):
    # x1 / z1 == x2 / z2  <==>  x1 * z2 == x2 * z1
    if (P[0] * Q[2] - Q[0] * P[2]) % q != 0:
        return False
    if (P[1] * Q[2] - Q[1] * P[2]) % q != 0:
        return False
    return True
