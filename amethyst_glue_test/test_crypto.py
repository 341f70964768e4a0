#!/usr/bin/env python
# -*- coding: utf-8 -*-

import binascii
from binascii import unhexlify
import unittest

from amethyst_glue.bcn import common, crypto
from amethyst_glue.bcn.core import ec_py


class CryptoTest(unittest.TestCase):
    """Simple tests"""

    def __init__(self, *args, **kwargs):
        super(CryptoTest, self).__init__(*args, **kwargs)

    def test_ed_crypto(self):
        sqr = ec_py.fe_expmod(ec_py.py_fe_sqrtm1, 2)
        self.assertEqual(sqr, ec_py.fe_mod(-1))
        self.assertEqual(
            ec_py.py_fe_A,
            ec_py.fe_mod(2 * (1 - ec_py.py_d) * ec_py.ed25519.inv(1 + ec_py.py_d)),
        )
        self.assertEqual(
            ec_py.fe_expmod(ec_py.py_fe_fffb1, 2),
            ec_py.fe_mod(-2 * ec_py.py_fe_A * (ec_py.py_fe_A + 2)),
        )
        self.assertEqual(
            ec_py.fe_expmod(ec_py.py_fe_fffb2, 2),
            ec_py.fe_mod(2 * ec_py.py_fe_A * (ec_py.py_fe_A + 2)),
        )

    def test_encoding(self):
        point = unhexlify(
            b"2486224797d05cae3cba4be043be2db0df381f3f19cfa113f86ab38e3d8d2bd0"
        )
        self.assertEqual(point, crypto.encodepoint(crypto.decodepoint(point)))
        self.assertTrue(
            crypto.point_eq(
                crypto.decodepoint(point),
                crypto.decodepoint(crypto.encodepoint(crypto.decodepoint(point))),
            )
        )

    def test_invalid_point(self):
        with self.assertRaises(ValueError):
            crypto.decodepoint(b"\xff" * 32)

    def test_scalarmult_base(self):
        scalar = crypto.decodeint(
            unhexlify(
                b"a0eea49140a3b036da30eacf64bd9d56ce3ef68ba82ef13571ec511edbcf8303"
            )
        )
        exp = unhexlify(
            b"16bb4a3c44e2ced511fc0d4cd86b13b3af21efc99fb0356199fac489f2544c09"
        )
        res = crypto.scalarmult_base(scalar)
        self.assertEqual(exp, crypto.encodepoint(res))
        self.assertTrue(crypto.point_eq(crypto.decodepoint(exp), res))

        scalar = crypto.decodeint(
            unhexlify(
                b"fd290dce39f781aebbdbd24584ed6d48bd300de19d9c3decfda0a6e2c6751d0f"
            )
        )
        exp = unhexlify(
            b"123daf90fc26f13c6529e6b49bfed498995ac383ef19c0db6771143f24ba8dd5"
        )
        res = crypto.scalarmult_base(scalar)
        self.assertEqual(exp, crypto.encodepoint(res))

    def test_scalarmult(self):
        priv = unhexlify(
            b"3482fb9735ef879fcae5ec7721b5d3646e155c4fb58d6cc11c732c9c9b76620a"
        )
        pub = unhexlify(
            b"2486224797d05cae3cba4be043be2db0df381f3f19cfa113f86ab38e3d8d2bd0"
        )
        exp = unhexlify(
            b"adcd1f5881f46f254900a03c654e71950a88a0236fa0a3a946c9b8daed6ef43d"
        )
        res = crypto.scalarmult(crypto.decodepoint(pub), crypto.decodeint(priv))
        self.assertEqual(exp, crypto.encodepoint(res))

    def test_cn_fast_hash(self):
        inp = unhexlify(
            b"259ef2aba8feb473cf39058a0fe30b9ff6d245b42b6826687ebd6b63128aff6405"
        )
        res = crypto.cn_fast_hash(inp)
        self.assertEqual(
            res,
            unhexlify(
                b"86db87b83fb1246efca5f3b0db09ce3fa4d605b0d10e6507cac253dd31a3ec16"
            ),
        )

    def test_hash_to_scalar(self):
        inp = unhexlify(
            b"259ef2aba8feb473cf39058a0fe30b9ff6d245b42b6826687ebd6b63128aff6405"
        )
        res = crypto.hash_to_scalar(inp)
        exp = crypto.decodeint(
            unhexlify(
                b"9907925b254e12162609fc0dfd0fef2aa4d605b0d10e6507cac253dd31a3ec06"
            )
        )
        self.assertTrue(crypto.sc_eq(res, exp))

        self.assertTrue(crypto.sc_eq(crypto.hash_to_scalar(inp, len(inp)), exp))
        self.assertTrue(
            crypto.sc_eq(crypto.hash_to_scalar(inp, 5), crypto.hash_to_scalar(inp[:5]))
        )
        self.assertTrue(
            crypto.sc_eq(crypto.hash_to_scalar(inp, 0), crypto.hash_to_scalar(b""))
        )

    def test_hash_to_point(self):
        data = unhexlify(
            b"42f6835bf83114a1f5f6076fe79bdfa0bd67c74b88f127d54572d3910dd09201"
        )
        res = crypto.hash_to_point(data)
        self.assertEqual(
            crypto.encodepoint(res),
            unhexlify(
                b"54863a0464c008acc99cffb179bc6cf34eb1bbdf6c29f7a070a7c6376ae30ab5"
            ),
        )

    def test_h(self):
        H = unhexlify(
            b"8b655970153799af2aeadc9ff1add0ea6c7251d54154cfa92c173a0dd39c1f94"
        )
        self.assertEqual(crypto.encodepoint(crypto.compute_H()), H)
        self.assertEqual(crypto.encodepoint(crypto.get_H()), H)

    def test_pointadd(self):
        a = crypto.random_scalar()
        A = crypto.scalarmult_base(a)
        A2 = crypto.point_add(A, A)
        A3 = crypto.point_add(A2, A)
        A4 = crypto.point_add(A3, A)
        A8 = crypto.scalarmult(A4, crypto.sc_init(2))

        A8p = crypto.point_mul8(A)
        self.assertTrue(crypto.point_eq(A8p, A8))
        self.assertTrue(crypto.point_eq(A4, crypto.scalarmult(A, crypto.sc_init(4))))
        self.assertTrue(crypto.point_eq(A3, crypto.scalarmult(A, crypto.sc_init(3))))
        self.assertTrue(crypto.point_eq(crypto.point_sub(A4, A), A3))

    def test_sc_inversion(self):
        inp = crypto.decodeint(
            unhexlify(
                b"3482fb9735ef879fcae5ec7721b5d3646e155c4fb58d6cc11c732c9c9b76620a"
            )
        )
        res = crypto.sc_inv(inp)
        self.assertEqual(
            binascii.hexlify(crypto.encodeint(res)),
            b"bcf365a551e6358f3f281a6241d4a25eded60230b60a1d48c67b51a85e33d70e",
        )
        self.assertTrue(crypto.sc_eq(crypto.sc_mul(res, inp), crypto.sc_init(1)))

        with self.assertRaises(ValueError):
            crypto.sc_inv(crypto.sc_0())

    def test_secret_keys_to_public_key(self):
        a = crypto.random_scalar()
        s = crypto.random_scalar()
        P = crypto.secret_keys_to_public_key(a, s)
        exp = crypto.point_add(crypto.scalarmult_base(a), crypto.scalarmult_h(s))
        self.assertTrue(crypto.point_eq(P, exp))

    def test_key_image(self):
        a = crypto.random_scalar()
        P = crypto.scalarmult_base(a)
        I = crypto.generate_key_image(P, a)
        exp = crypto.scalarmult(crypto.hash_to_point(crypto.encodepoint(P)), a)
        self.assertTrue(crypto.point_eq(I, exp))

    def test_hd_secretkey(self):
        a0 = crypto.random_scalar()
        base = crypto.scalarmult_base(crypto.random_scalar())

        k0 = crypto.generate_hd_secretkey(a0, base, 0)
        k1 = crypto.generate_hd_secretkey(a0, base, 1)
        self.assertFalse(crypto.sc_eq(k0, k1))
        self.assertTrue(crypto.sc_eq(k0, crypto.generate_hd_secretkey(a0, base, 0)))

        exp = crypto.sc_add(
            crypto.hash_to_scalar(crypto.encodepoint(base) + b"address" + b"\x01"), a0
        )
        self.assertTrue(crypto.sc_eq(k1, exp))

    def test_deterministic_keys(self):
        seed = crypto.cn_fast_hash(b"seed")
        inputs_hash = crypto.cn_fast_hash(b"inputs")

        sec, pub = crypto.deterministic_keys_from_seed(
            inputs_hash, seed, common.dump_uvarint_b(1)
        )
        self.assertTrue(crypto.sc_eq(sec, crypto.hash_to_scalar(seed + inputs_hash + b"\x01")))
        self.assertTrue(crypto.point_eq(pub, crypto.scalarmult_base(sec)))

    def test_signature_H(self):
        for i in range(5):
            sec = crypto.random_scalar()
            sec_H = crypto.scalarmult_h(sec)
            data = crypto.cn_fast_hash(bytes([i]))

            c, r = crypto.generate_signature_H(data, sec_H, sec)
            self.assertTrue(crypto.check_signature_H(data, sec_H, c, r))
            self.assertFalse(
                crypto.check_signature_H(data, sec_H, crypto.sc_add(c, crypto.sc_init(1)), r)
            )
            self.assertFalse(
                crypto.check_signature_H(crypto.cn_fast_hash(b"other"), sec_H, c, r)
            )


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
