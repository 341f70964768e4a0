#!/usr/bin/env python
# -*- coding: utf-8 -*-

import unittest

from amethyst_glue.bcn.ring_sig import check_ring_signature_amethyst
from amethyst_glue.hardware import config
from amethyst_glue.hardware.emulator import Emulator
from amethyst_glue.hardware.errors import DeviceMismatch
from amethyst_glue.hardware.sign_state import State

from amethyst_glue_test.base_emulator_test import BaseEmulatorTest


def flip_bit(x):
    x = bytearray(x)
    x[0] ^= 0x01
    return bytes(x)


class TamperedEmulator(Emulator):
    """
    Device returning a modified value from one operation
    """

    def __init__(self, *args, tamper=None, **kwargs):
        self.tamper = tamper
        super().__init__(*args, **kwargs)

    def get_hardware_type(self):
        return "Tampered"

    def get_public_view_key(self):
        res = super().get_public_view_key()
        return flip_bit(res) if self.tamper == "get_public_view_key" else res

    def sign_add_output(self, *args, **kwargs):
        res = super().sign_add_output(*args, **kwargs)
        if self.tamper == "sign_add_output":
            res = res._replace(encrypted_address_type=res.encrypted_address_type ^ 1)
        return res

    def sign_step_a(self, *args, **kwargs):
        res = super().sign_step_a(*args, **kwargs)
        if self.tamper == "sign_step_a":
            res = res._replace(sig_p=flip_bit(res.sig_p))
        elif self.tamper == "sign_step_a_x":
            res = res._replace(x=flip_bit(res.x))
        return res

    def sign_get_c0(self):
        res = super().sign_get_c0()
        return flip_bit(res) if self.tamper == "sign_get_c0" else res


class ProxyTest(BaseEmulatorTest):
    """Emulator mirroring calls to another device"""

    def __init__(self, *args, **kwargs):
        super(ProxyTest, self).__init__(*args, **kwargs)

    def new_proxied(self, idx=0, proxy_idx=0, **kwargs):
        proxy_cls = kwargs.pop("proxy_cls", Emulator)
        proxy_kwargs = kwargs.pop("proxy_kwargs", {})
        proxy_kwargs.setdefault("random_source", config.zero_random_source)
        proxy = proxy_cls(self.get_mnemonics()[proxy_idx], **proxy_kwargs)
        return self.new_emulator(idx, proxy=proxy, **kwargs)

    def test_parity(self):
        emu = self.new_proxied()
        self.assertEqual(emu.get_hardware_type(), "Emulator connected to Emulator")

        owned = self.make_owned_output(emu, address_index=1)
        dst = self.make_simple_destination()
        res = self.run_session(
            emu,
            [(1000, owned), (20, owned)],
            [(True, 10, 2, None), (False, 900, 0, dst)],
            extra=bytes(40),
            ring_size=3,
            sec_index=1,
            extra_chunk=16,
        )
        self.assertTrue(check_ring_signature_amethyst(res.arg))
        self.assertEqual(emu.sign.state, State.FINISHED)
        self.assertEqual(emu.proxy.sign.state, State.FINISHED)
        self.assertEqual(emu.proxy.sign.tx_prefix_hash, emu.sign.tx_prefix_hash)
        self.assertEqual(emu.proxy.sign.fee, 110)

        self.assertEqual(
            emu.mul_by_view_secret_key([owned.public_key]),
            emu.proxy.mul_by_view_secret_key([owned.public_key]),
        )
        view = emu.export_view_only()
        self.assertEqual(view.view_secret_key, emu.proxy.export_view_only().view_secret_key)

    def test_proof_parity(self):
        emu = self.new_proxied()
        emu.proof_start(b"message")
        self.assertEqual(emu.proxy.sign.tx_prefix_hash, emu.sign.tx_prefix_hash)
        self.assertEqual(emu.proxy.sign.state, State.EXPECT_STEP_A)

    def test_different_wallet(self):
        with self.assertRaises(DeviceMismatch):
            self.new_proxied(0, 1)

    def test_tampered_getter(self):
        with self.assertRaises(DeviceMismatch) as cm:
            self.new_proxied(
                proxy_cls=TamperedEmulator,
                proxy_kwargs={"tamper": "get_public_view_key"},
            )
        self.assertEqual(cm.exception.op, "get_public_view_key")

    def test_tampered_sign(self):
        for op in ("sign_add_output", "sign_step_a"):
            emu = self.new_proxied(
                proxy_cls=TamperedEmulator, proxy_kwargs={"tamper": op}
            )
            self.assertEqual(emu.get_hardware_type(), "Emulator connected to Tampered")
            owned = self.make_owned_output(emu)
            dst = self.make_simple_destination()

            with self.assertRaises(DeviceMismatch) as cm:
                self.run_session(emu, [(1000, owned)], [(False, 900, 0, dst)])
            self.assertEqual(cm.exception.op, op)

    def test_randomized_values_not_compared(self):
        for op in ("sign_step_a_x", "sign_get_c0"):
            emu = self.new_proxied(
                proxy_cls=TamperedEmulator, proxy_kwargs={"tamper": op}
            )
            owned = self.make_owned_output(emu)
            dst = self.make_simple_destination()
            res = self.run_session(emu, [(1000, owned)], [(False, 900, 0, dst)])
            self.assertTrue(check_ring_signature_amethyst(res.arg))

    def test_different_random_source(self):
        emu = self.new_proxied(
            random_source=config.system_random_source,
            proxy_kwargs={"random_source": config.system_random_source},
        )
        owned = self.make_owned_output(emu, address_index=2)
        dst = self.make_simple_destination()
        res = self.run_session(
            emu, [(1000, owned), (500, owned)], [(False, 900, 0, dst)], ring_size=3, sec_index=2
        )
        self.assertTrue(check_ring_signature_amethyst(res.arg))
        self.assertEqual(emu.proxy.sign.state, State.FINISHED)
        self.assertNotEqual(emu.proxy.sign.random_seed, emu.sign.random_seed)
        self.assertNotEqual(emu.proxy.sign.c0, emu.sign.c0)
        self.assertEqual(emu.proxy.sign.tx_prefix_hash, emu.sign.tx_prefix_hash)

        emu = self.new_proxied(
            random_source=lambda: b"\x01" * config.RANDOM_SEED_SIZE,
            proxy_cls=TamperedEmulator,
            proxy_kwargs={"tamper": "sign_step_a", "random_source": config.system_random_source},
        )
        with self.assertRaises(DeviceMismatch) as cm:
            self.run_session(emu, [(1000, owned)], [(False, 900, 0, dst)])
        self.assertEqual(cm.exception.op, "sign_step_a")
        self.assertTrue(emu.sign.is_finished())


if __name__ == "__main__":
    unittest.main()  # pragma: no cover
