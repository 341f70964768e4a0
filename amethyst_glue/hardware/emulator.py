#!/usr/bin/env python
# -*- coding: utf-8 -*-

import functools
from collections import namedtuple

from amethyst_glue.bcn import common, crypto
from amethyst_glue.bcn.sub import addr
from amethyst_glue.bcn.sub.keccak_hasher import KeccakStream
from amethyst_glue.compat import log
from amethyst_glue.hardware import config
from amethyst_glue.hardware.creds import KeyHierarchy
from amethyst_glue.hardware.errors import (
    ActionCancelled,
    AmountOverflow,
    DeviceMismatch,
    InconsistentDestination,
    InvalidArgument,
    InvalidMnemonic,
    Invariant,
    NegativeFee,
    ProtocolOrderViolation,
)
from amethyst_glue.hardware.iface import EmulatorInterface, HardwareWallet
from amethyst_glue.hardware.sign_state import SigningState, State


OutputKeys = namedtuple(
    "OutputKeys", ("public_key", "encrypted_secret", "encrypted_address_type")
)
StepA = namedtuple("StepA", ("sig_p", "x", "y"))
StepB = namedtuple("StepB", ("ra", "rb", "rc"))
ViewOnlyKeys = namedtuple(
    "ViewOnlyKeys",
    (
        "audit_key_base_secret_key",
        "view_secret_key",
        "tx_derivation_seed",
        "view_secrets_signature",
    ),
)

# Guard byte prepended to the message in the proof session
PROOF_GUARD_BYTE = 0


def session_call(fnc):
    """
    Signing session entry point. Any error terminates the session,
    the caller has to start a new one.
    """

    @functools.wraps(fnc)
    def wrapper(self, *args, **kwargs):
        try:
            return fnc(self, *args, **kwargs)
        except Exception as e:
            self.tsx_exc_handler(e)
            raise

    return wrapper


class Emulator(HardwareWallet):
    """
    Signing device emulator. Holds the key hierarchy and a single signing
    session. When a proxy device is attached, every operation is mirrored
    to it and deterministic results have to match.
    """

    def __init__(self, mnemonic, proxy=None, iface=None, random_source=None):
        """
        :param mnemonic: BIP-39 mnemonic
        :param proxy: optional HardwareWallet to mirror calls to
        :param iface: user interface / trace sink
        :param random_source: callable returning a 32 B session seed
        """
        self.proxy = proxy  # type: HardwareWallet
        self.iface = iface if iface is not None else EmulatorInterface()
        self.random_source = random_source
        self.sign = SigningState()
        self.err_ctr = 0

        try:
            # Unlinkable wallet, the BIP-44 account equals its address tag
            self.keys = KeyHierarchy.from_mnemonics(
                mnemonic, address_type=addr.ADDRESS_TAG_UNLINKABLE, trace=self.iface.trace
            )
        except InvalidMnemonic as e:
            log.exception(__name__, e)
            raise
        self.iface.trace("wallet_key", self.keys.wallet_key)

        if self.proxy is not None:
            self._check_proxy("get_A_plus_SH", self.get_A_plus_SH(), self.proxy.get_A_plus_SH())
            self._check_proxy(
                "get_v_mul_A_plus_SH",
                self.get_v_mul_A_plus_SH(),
                self.proxy.get_v_mul_A_plus_SH(),
            )
            self._check_proxy(
                "get_public_view_key",
                self.get_public_view_key(),
                self.proxy.get_public_view_key(),
            )
            self._check_proxy("get_wallet_key", self.get_wallet_key(), self.proxy.get_wallet_key())

        log.info(__name__, "Started %s", self.get_hardware_type())

    #
    # Helpers
    #

    def _fail(self, exc_type, msg, **kwargs):
        e = exc_type(msg, **kwargs)
        log.exception(__name__, e)
        raise e

    def tsx_exc_handler(self, e):
        """
        Handles the exception thrown in the signing session. Clears the session state.

        :param e:
        :return:
        """
        self.err_ctr += 1
        self.sign = SigningState()
        self.iface.transaction_error(e)

    def _check_state(self, op, state, counter_ok=True):
        if self.sign.state != state or not counter_ok:
            self._fail(
                ProtocolOrderViolation,
                "%s not allowed in %r" % (op, self.sign),
                state=self.sign.state,
            )

    def _check_proxy(self, op, local, remote):
        if local != remote:
            self._fail(DeviceMismatch, "Proxy device result mismatch in %s" % op, op=op)

    def _add_amount(self, total, amount):
        """
        Overflow checked uint64 addition
        :param total:
        :param amount:
        :return:
        """
        if amount < 0 or amount > common.UINT64_MAX - total:
            self._fail(AmountOverflow, "Amount overflow", total=total, amount=amount)
        return total + amount

    def _uint(self, x, name, limit=common.UINT64_MAX):
        if not isinstance(x, int) or isinstance(x, bool) or not 0 <= x <= limit:
            self._fail(InvalidArgument, "%s has to be an unsigned integer, got %r" % (name, x))
        return x

    def _scalar(self, x, name, nonzero=False):
        if x is None or len(x) != 32:
            self._fail(InvalidArgument, "%s has to be a 32 B scalar" % name)
        sc = crypto.decodeint(bytes(x))
        if nonzero and not crypto.sc_isnonzero(sc):
            self._fail(InvalidArgument, "%s must not be zero" % name)
        return sc

    def _point(self, x, name):
        if x is None or len(x) != 32:
            self._fail(InvalidArgument, "%s has to be a 32 B point" % name)
        try:
            return crypto.decodepoint(bytes(x))
        except ValueError as e:
            self._fail(InvalidArgument, "%s is not a valid point: %s" % (name, e))

    def _random_seed(self):
        source = self.random_source or config.get_random_source()
        seed = source()
        if seed is None or len(seed) != config.RANDOM_SEED_SIZE:
            self._fail(InvalidArgument, "Random source has to return 32 B")
        return bytes(seed)

    def _output_secrets(self, inv_output_secret_hash, address_index):
        self._uint(address_index, "address_index")
        inv = self._scalar(inv_output_secret_hash, "inv_output_secret_hash", True)
        return self.keys.output_secrets(inv, address_index)

    def _sign_secret(self, secret_name):
        idx = self.sign.inputs_counter
        return self.keys.sign_secret(self.sign.random_seed, idx, secret_name)

    #
    # Getters
    #

    def get_hardware_type(self):
        res = "Emulator"
        if self.proxy is not None:
            res += " connected to " + self.proxy.get_hardware_type()
        return res

    def get_wallet_key(self):
        return self.keys.wallet_key

    def get_A_plus_SH(self):
        return crypto.encodepoint(self.keys.A_plus_sH)

    def get_v_mul_A_plus_SH(self):
        return crypto.encodepoint(self.keys.v_mul_A_plus_sH)

    def get_public_view_key(self):
        return crypto.encodepoint(self.keys.view_public_key)

    #
    # Addresses, keys
    #

    def prepare_address(self, address_index):
        """
        Audit secret key of the subaddress
        :param address_index:
        :return:
        """
        self._uint(address_index, "address_index")
        return crypto.encodeint(self.keys.prepare_address(address_index))

    def prepare_address_public(self, address_index):
        """
        :param address_index:
        :return: (S, Sv)
        """
        self._uint(address_index, "address_index")
        S, Sv = self.keys.prepare_address_public(address_index)
        return crypto.encodepoint(S), crypto.encodepoint(Sv)

    def get_address(self, address_index=0):
        self._uint(address_index, "address_index")
        S, Sv = self.keys.prepare_address_public(address_index)
        return addr.encode_address(addr.ADDRESS_TAG_UNLINKABLE, S, Sv)

    def mul_by_view_secret_key(self, output_public_keys):
        pubs = [
            self._point(x, "output_public_keys[%d]" % i)
            for i, x in enumerate(output_public_keys)
        ]
        res = [crypto.encodepoint(x) for x in self.keys.mul_by_view_secret_key(pubs)]
        if self.proxy is not None:
            self._check_proxy(
                "mul_by_view_secret_key",
                res,
                list(self.proxy.mul_by_view_secret_key(output_public_keys)),
            )
        return res

    def generate_keyimage(self, output_public_key, inv_output_secret_hash, address_index):
        pub = self._point(output_public_key, "output_public_key")
        self._uint(address_index, "address_index")
        inv = self._scalar(inv_output_secret_hash, "inv_output_secret_hash", True)
        try:
            key_image = self.keys.generate_keyimage(pub, inv, address_index)
        except Invariant as e:
            log.exception(__name__, e)
            raise

        res = crypto.encodepoint(key_image)
        if self.proxy is not None:
            self._check_proxy(
                "generate_keyimage",
                res,
                self.proxy.generate_keyimage(
                    output_public_key, inv_output_secret_hash, address_index
                ),
            )
        return res

    def generate_output_seed(self, tx_inputs_hash, out_index):
        self._uint(out_index, "out_index")
        if tx_inputs_hash is None or len(tx_inputs_hash) != 32:
            self._fail(InvalidArgument, "tx_inputs_hash has to be 32 B")
        res = crypto.encodepoint(self.keys.generate_output_seed(tx_inputs_hash, out_index))
        if self.proxy is not None:
            self._check_proxy(
                "generate_output_seed",
                res,
                self.proxy.generate_output_seed(tx_inputs_hash, out_index),
            )
        return res

    def export_view_only(self):
        """
        Exports view secrets with a signature proving the spend key ownership.
        :return: ViewOnlyKeys, signature is (c, r)
        """
        tx_derivation_seed = None
        if self.iface.confirm_view_outgoing_addresses():
            tx_derivation_seed = self.keys.tx_derivation_seed

        c, r = self.keys.sign_view_secrets()
        res = ViewOnlyKeys(
            crypto.encodeint(self.keys.audit_key_base_secret_key),
            crypto.encodeint(self.keys.view_secret_key),
            tx_derivation_seed,
            (crypto.encodeint(c), crypto.encodeint(r)),
        )

        if self.proxy is not None:
            pres = self.proxy.export_view_only()
            # Signatures are randomized
            self._check_proxy("export_view_only", tuple(res[:3]), tuple(pres[:3]))
        return res

    #
    # Signing session
    #

    @session_call
    def sign_start(self, version, unlock_time, inputs_size, outputs_size, extra_size):
        for name, val in (
            ("version", version),
            ("unlock_time", unlock_time),
            ("inputs_size", inputs_size),
            ("outputs_size", outputs_size),
            ("extra_size", extra_size),
        ):
            self._uint(val, name)
        if inputs_size == 0 or outputs_size == 0 or version == 0:
            self._fail(
                ProtocolOrderViolation,
                "Invalid transaction shape, version %s, inputs %s, outputs %s"
                % (version, inputs_size, outputs_size),
            )

        sign = SigningState()
        sign.inputs_size = inputs_size
        sign.outputs_size = outputs_size
        sign.extra_size = extra_size
        sign.state = State.EXPECT_ADD_INPUT

        sign.tx_prefix_stream.append(version)
        sign.tx_prefix_stream.append(unlock_time)
        sign.tx_prefix_stream.append(inputs_size)
        sign.tx_inputs_stream.append(inputs_size)

        sign.random_seed = self._random_seed()
        self.sign = sign
        log.debug(
            __name__,
            "sign_start: version %s, inputs %s, outputs %s, extra %s",
            version,
            inputs_size,
            outputs_size,
            extra_size,
        )

        if self.proxy is not None:
            self.proxy.sign_start(version, unlock_time, inputs_size, outputs_size, extra_size)

    @session_call
    def sign_add_input(self, amount, output_indexes, inv_output_secret_hash, address_index):
        sign = self.sign
        self._check_state(
            "sign_add_input",
            State.EXPECT_ADD_INPUT,
            sign.inputs_counter < sign.inputs_size,
        )
        inputs_amount = self._add_amount(sign.inputs_amount, amount)
        for i, idx in enumerate(output_indexes):
            self._uint(idx, "output_indexes[%d]" % i)
        _, _, _, key_image = self._output_secrets(inv_output_secret_hash, address_index)

        sign.inputs_amount = inputs_amount
        for stream in (sign.tx_prefix_stream, sign.tx_inputs_stream):
            stream.append_byte(addr.INPUT_KEY_TAG)
            stream.append(amount)
            stream.append(len(output_indexes))
            for idx in output_indexes:
                stream.append(idx)
            stream.append(crypto.encodepoint(key_image))

        self.iface.trace("key_image", key_image, sign.inputs_counter)

        if self.proxy is not None:
            self.proxy.sign_add_input(
                amount, output_indexes, inv_output_secret_hash, address_index
            )

        sign.inputs_counter += 1
        if sign.inputs_counter < sign.inputs_size:
            return

        sign.state = State.EXPECT_ADD_OUTPUT
        sign.tx_inputs_hash = sign.tx_inputs_stream.digest()
        sign.tx_prefix_stream.append(sign.outputs_size)
        log.debug(__name__, "All %d inputs added", sign.inputs_size)

    def _compute_output(self, dst_tag, dst_S, dst_Sv):
        sign = self.sign
        output_seed = self.keys.generate_output_seed(sign.tx_inputs_hash, sign.outputs_counter)
        self.iface.trace("output_seed", output_seed, sign.outputs_counter)

        pub, enc, enc_type = addr.compute_output(
            output_seed, sign.tx_inputs_hash, sign.outputs_counter, dst_tag, dst_S, dst_Sv
        )
        return OutputKeys(crypto.encodepoint(pub), crypto.encodepoint(enc), enc_type)

    @session_call
    def sign_add_output(
        self,
        change,
        amount,
        change_address_index=0,
        dst_address_tag=None,
        dst_address_s=None,
        dst_address_s_v=None,
    ):
        """
        Adds the next output, either the change or the single destination.

        :param change:
        :param amount:
        :param change_address_index: subaddress receiving the change
        :param dst_address_tag: destination address tag, non-change only
        :param dst_address_s:
        :param dst_address_s_v:
        :return: OutputKeys
        """
        sign = self.sign
        self._check_state(
            "sign_add_output",
            State.EXPECT_ADD_OUTPUT,
            sign.outputs_counter < sign.outputs_size,
        )

        if change:
            self._uint(change_address_index, "change_address_index")
            change_amount = self._add_amount(sign.change_amount, amount)
            S, Sv = self.keys.prepare_address_public(change_address_index)
            res = self._compute_output(addr.ADDRESS_TAG_UNLINKABLE, S, Sv)
            sign.change_amount = change_amount

        else:
            if not addr.is_known_tag(dst_address_tag):
                self._fail(InvalidArgument, "Unknown address tag %s" % dst_address_tag)
            S = self._point(dst_address_s, "dst_address_s")
            Sv = self._point(dst_address_s_v, "dst_address_s_v")
            dst = (dst_address_tag, bytes(dst_address_s), bytes(dst_address_s_v))

            if sign.dst_address_set and dst != (
                sign.dst_address_tag,
                sign.dst_address_s,
                sign.dst_address_s_v,
            ):
                self._fail(
                    InconsistentDestination,
                    "Only one destination address per transaction",
                    output_index=sign.outputs_counter,
                )

            dst_amount = self._add_amount(sign.dst_amount, amount)
            res = self._compute_output(dst_address_tag, S, Sv)
            if not sign.dst_address_set:
                sign.dst_address_set = True
                sign.dst_address_tag, sign.dst_address_s, sign.dst_address_s_v = dst
            sign.dst_amount = dst_amount

        sign.tx_prefix_stream.append_byte(addr.OUTPUT_KEY_TAG)
        sign.tx_prefix_stream.append(amount)
        sign.tx_prefix_stream.append(res.public_key)
        sign.tx_prefix_stream.append(res.encrypted_secret)
        sign.tx_prefix_stream.append_byte(res.encrypted_address_type)

        if self.proxy is not None:
            pres = self.proxy.sign_add_output(
                change,
                amount,
                change_address_index,
                dst_address_tag,
                dst_address_s,
                dst_address_s_v,
            )
            self._check_proxy("sign_add_output", tuple(res), tuple(pres))

        sign.outputs_counter += 1
        if sign.outputs_counter < sign.outputs_size:
            return res

        outputs_amount = self._add_amount(sign.dst_amount, sign.change_amount)
        if sign.inputs_amount < outputs_amount:
            self._fail(
                NegativeFee,
                "Outputs exceed inputs",
                inputs_amount=sign.inputs_amount,
                outputs_amount=outputs_amount,
            )

        sign.fee = sign.inputs_amount - outputs_amount
        log.info(__name__, "Transaction fee: %d", sign.fee)

        if sign.dst_address_set and not self.iface.confirm_output(
            sign.dst_address_tag, sign.dst_address_s, sign.dst_address_s_v, sign.dst_amount
        ):
            self._fail(ActionCancelled, "Destination rejected by user")
        if not self.iface.confirm_fee(sign.fee):
            self._fail(ActionCancelled, "Fee rejected by user")

        sign.state = State.EXPECT_ADD_EXTRA_CHUNK
        sign.tx_prefix_stream.append(sign.extra_size)
        return res

    @session_call
    def sign_add_extra(self, chunk):
        sign = self.sign
        chunk = bytes(chunk)
        self._check_state(
            "sign_add_extra",
            State.EXPECT_ADD_EXTRA_CHUNK,
            sign.extra_counter + len(chunk) <= sign.extra_size,
        )

        sign.tx_prefix_stream.append(chunk)
        sign.extra_counter += len(chunk)

        if self.proxy is not None:
            self.proxy.sign_add_extra(chunk)

        if sign.extra_counter < sign.extra_size:
            return

        sign.state = State.EXPECT_STEP_A
        sign.tx_prefix_hash = sign.tx_prefix_stream.digest()
        sign.inputs_counter = 0
        sign.tx_inputs_stream = KeccakStream(sign.tx_prefix_hash)
        self.iface.trace("tx_prefix_hash", sign.tx_prefix_hash)

    @session_call
    def sign_step_a(self, inv_output_secret_hash, address_index):
        """
        Round one of the input signature, commitments
        :param inv_output_secret_hash:
        :param address_index:
        :return: StepA(sig_p, x, y)
        """
        sign = self.sign
        next_input = (
            sign.state == State.EXPECT_STEP_A_MORE_DATA
            and sign.inputs_counter + 1 < sign.inputs_size
        )
        if not next_input:
            self._check_state(
                "sign_step_a", State.EXPECT_STEP_A, sign.inputs_counter < sign.inputs_size
            )

        sec_a, sec_s, pub, key_image = self._output_secrets(
            inv_output_secret_hash, address_index
        )
        if next_input:
            sign.inputs_counter += 1
            sign.state = State.EXPECT_STEP_A
        b_coin = crypto.hash_to_good_point(crypto.encodepoint(key_image))
        hash_pubs_sec = crypto.hash_to_good_point(crypto.encodepoint(pub))

        p = crypto.point_sub(crypto.scalarmult_h(sec_s), crypto.scalarmult(b_coin, sec_a))
        sign.tx_inputs_stream.append(crypto.encodepoint(p))

        ka = self._sign_secret(b"ka")
        kb = self._sign_secret(b"kb")
        kc = self._sign_secret(b"kc")

        z = crypto.point_add(crypto.scalarmult_h(kb), crypto.scalarmult(b_coin, kc))
        sign.tx_inputs_stream.append(crypto.encodepoint(z))

        G_plus_B = crypto.point_add(crypto.BASE, b_coin)
        x = crypto.scalarmult(G_plus_B, ka)
        y = crypto.scalarmult(hash_pubs_sec, ka)

        self.iface.trace("b_coin", b_coin, sign.inputs_counter)
        self.iface.trace("p", p, sign.inputs_counter)
        self.iface.trace("z", z, sign.inputs_counter)

        sign.state = State.EXPECT_STEP_A_MORE_DATA
        res = StepA(crypto.encodepoint(p), crypto.encodepoint(x), crypto.encodepoint(y))

        if self.proxy is not None:
            pres = self.proxy.sign_step_a(inv_output_secret_hash, address_index)
            # x, y depend on the session random seed
            self._check_proxy("sign_step_a", res.sig_p, pres.sig_p)
        return res

    @session_call
    def sign_step_a_more_data(self, data):
        self._check_state("sign_step_a_more_data", State.EXPECT_STEP_A_MORE_DATA)
        self.sign.tx_inputs_stream.append(bytes(data))

        if self.proxy is not None:
            self.proxy.sign_step_a_more_data(data)

    @session_call
    def sign_get_c0(self):
        sign = self.sign
        self._check_state(
            "sign_get_c0",
            State.EXPECT_STEP_A_MORE_DATA,
            sign.inputs_counter + 1 == sign.inputs_size,
        )

        sign.c0 = sign.tx_inputs_stream.to_scalar()
        sign.state = State.EXPECT_STEP_B
        sign.inputs_counter = 0
        self.iface.trace("c0", sign.c0)

        res = crypto.encodeint(sign.c0)
        if self.proxy is not None:
            self.proxy.sign_get_c0()
        return res

    @session_call
    def sign_step_b(self, inv_output_secret_hash, address_index, my_c):
        """
        Round two of the input signature, responses
        :param inv_output_secret_hash:
        :param address_index:
        :param my_c: challenge of the signer's ring position
        :return: StepB(ra, rb, rc)
        """
        sign = self.sign
        self._check_state(
            "sign_step_b", State.EXPECT_STEP_B, sign.inputs_counter < sign.inputs_size
        )

        my_c_sc = self._scalar(my_c, "my_c")
        sec_a, sec_s, _, _ = self._output_secrets(inv_output_secret_hash, address_index)

        ka = self._sign_secret(b"ka")
        kb = self._sign_secret(b"kb")
        kc = self._sign_secret(b"kc")

        rb = crypto.sc_mulsub(sign.c0, sec_s, kb)
        rc = crypto.sc_muladd(sign.c0, sec_a, kc)
        ra = crypto.sc_mulsub(my_c_sc, sec_a, ka)
        res = StepB(crypto.encodeint(ra), crypto.encodeint(rb), crypto.encodeint(rc))

        if self.proxy is not None:
            self.proxy.sign_step_b(inv_output_secret_hash, address_index, my_c)

        sign.inputs_counter += 1
        if sign.inputs_counter == sign.inputs_size:
            sign.state = State.FINISHED
            log.debug(__name__, "Signature finished")
        return res

    @session_call
    def proof_start(self, data):
        """
        Single input session signing an arbitrary message
        :param data:
        :return:
        """
        sign = SigningState()
        sign.inputs_size = 1
        sign.tx_prefix_stream.append_byte(PROOF_GUARD_BYTE)
        sign.tx_prefix_stream.append(bytes(data))
        sign.tx_prefix_hash = sign.tx_prefix_stream.digest()
        sign.random_seed = self._random_seed()

        sign.tx_inputs_stream.append(sign.tx_prefix_hash)
        sign.state = State.EXPECT_STEP_A
        self.sign = sign
        log.debug(__name__, "proof_start, message of %d B", len(data))

        if self.proxy is not None:
            self.proxy.proof_start(data)
