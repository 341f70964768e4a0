#!/usr/bin/env python
# -*- coding: utf-8 -*-

from amethyst_glue.bcn import common, crypto
from amethyst_glue.bcn.sub.keccak_hasher import KeccakStream
from amethyst_glue.bcn.sub.seed import SeedDerivation
from amethyst_glue.compat import log
from amethyst_glue.hardware.errors import InvalidMnemonic, Invariant, invariant


def derive_from_seed(seed, append):
    """
    Keccak(seed || append)
    :param seed:
    :param append: domain separation string
    :return:
    """
    return crypto.cn_fast_hash(bytes(seed) + append.encode("ascii"))


def derive_scalar_from_seed(seed, append):
    """
    H_s(seed || append)
    :param seed:
    :param append:
    :return:
    """
    return crypto.hash_to_scalar(bytes(seed) + append.encode("ascii"))


class KeyHierarchy(object):
    """
    Device secrets derived from one seed. Immutable after construction
    except the single subaddress cache slot.
    """

    def __init__(self, seed=None, trace=None):
        self.seed_derivation = None
        self.trace = trace

        self.tx_derivation_seed = None  # type: bytes
        self.view_secret_key = None  # type: crypto.EdScalar
        self.audit_key_base_secret_key = None  # type: crypto.EdScalar
        self.spend_secret_key = None  # type: crypto.EdScalar
        self.wallet_key = None  # type: bytes

        self.sH = None  # type: crypto.EdPoint
        self.view_public_key = None
        self.A = None
        self.A_plus_sH = None
        self.v_mul_A_plus_sH = None

        self.last_address_index = None
        self.last_address_audit_secret_key = None

        if seed is not None:
            self.set_seed(seed)

    def _trace(self, name, value, index=None):
        if self.trace is not None:
            self.trace(name, value, index)

    def set_seed(self, seed):
        """
        Derives domain separated secrets from the 32 B device seed
        :param seed:
        :return:
        """
        self.tx_derivation_seed = derive_from_seed(seed, "tx_derivation")
        self.view_secret_key = derive_scalar_from_seed(seed, "view_key")
        self.audit_key_base_secret_key = derive_scalar_from_seed(seed, "audit_key_base")
        self.spend_secret_key = derive_scalar_from_seed(seed, "spend_key")
        self.wallet_key = derive_from_seed(seed, "wallet_key")

        for sec in (
            self.view_secret_key,
            self.audit_key_base_secret_key,
            self.spend_secret_key,
        ):
            invariant(crypto.sc_isnonzero(sec), msg="Zero secret derived")

        self.sH = crypto.scalarmult_h(self.spend_secret_key)
        self.view_public_key = crypto.secret_key_to_public_key(self.view_secret_key)
        self.A = crypto.secret_key_to_public_key(self.audit_key_base_secret_key)
        self.A_plus_sH = crypto.point_add(self.A, self.sH)
        self.v_mul_A_plus_sH = crypto.scalarmult(self.A_plus_sH, self.view_secret_key)

        self.last_address_index = None
        self.last_address_audit_secret_key = None

        self._trace("A", self.A)
        self._trace("view_public_key", self.view_public_key)
        self._trace("sH", self.sH)
        return self

    @classmethod
    def from_mnemonics(cls, mnemonics, address_type=1, passphrase=b"", trace=None):
        """
        Checks BIP-39 mnemonics and derives the whole hierarchy.
        :param mnemonics:
        :param address_type:
        :param passphrase:
        :param trace: optional sink, trace(name, value, index)
        :return:
        """
        sd = SeedDerivation.from_mnemonics(mnemonics, address_type, passphrase)
        if sd is None:
            raise InvalidMnemonic("Invalid mnemonic checksum")

        log.debug(__name__, "Seed derived over path %s", sd.path)
        r = cls(trace=trace)
        r.seed_derivation = sd
        r.set_seed(sd.seed)
        return r

    @property
    def mnemonics(self):
        return self.seed_derivation.mnemonics if self.seed_derivation else None

    def prepare_address(self, address_index):
        """
        Audit secret key of the subaddress, one slot cache
        :param address_index:
        :return:
        """
        if address_index != self.last_address_index:
            sec = crypto.generate_hd_secretkey(
                self.audit_key_base_secret_key, self.A_plus_sH, address_index
            )
            self.last_address_index = address_index
            self.last_address_audit_secret_key = sec
        return self.last_address_audit_secret_key

    def prepare_address_public(self, address_index):
        """
        Public part of the subaddress
        :param address_index:
        :return: (S, Sv)
        """
        sec = self.prepare_address(address_index)
        address_S = crypto.point_add(crypto.secret_key_to_public_key(sec), self.sH)
        address_Sv = crypto.scalarmult(address_S, self.view_secret_key)
        return address_S, address_Sv

    def output_secrets(self, inv_output_secret_hash, address_index):
        """
        One-time output secrets (a, s), public key a*G + s*H and its key image
        :param inv_output_secret_hash:
        :param address_index:
        :return: (sec_a, sec_s, public_key, key_image)
        """
        sec = self.prepare_address(address_index)
        sec_a = crypto.sc_mul(sec, inv_output_secret_hash)
        sec_s = crypto.sc_mul(self.spend_secret_key, inv_output_secret_hash)
        pub = crypto.secret_keys_to_public_key(sec_a, sec_s)
        key_image = crypto.generate_key_image(pub, sec_a)
        return sec_a, sec_s, pub, key_image

    def generate_keyimage(self, output_public_key, inv_output_secret_hash, address_index):
        """
        Key image of the owned output. The supplied public key is only
        checked against the re-derived one, never used for the result.

        :param output_public_key:
        :param inv_output_secret_hash:
        :param address_index:
        :return:
        """
        _, _, pub, key_image = self.output_secrets(inv_output_secret_hash, address_index)
        if pub != output_public_key:
            raise Invariant(
                "Output public key does not match the address",
                address_index=address_index,
            )
        return key_image

    def mul_by_view_secret_key(self, output_public_keys):
        res = []
        for pub in output_public_keys:
            crypto.check_ed25519point(pub)
            res.append(crypto.scalarmult(pub, self.view_secret_key))
        return res

    def generate_output_seed(self, tx_inputs_hash, out_index):
        _, pub = crypto.deterministic_keys_from_seed(
            tx_inputs_hash, self.tx_derivation_seed, common.dump_uvarint_b(out_index)
        )
        return pub

    def view_secrets_hash(self):
        ks = KeccakStream()
        ks.append(crypto.encodeint(self.audit_key_base_secret_key))
        ks.append(crypto.encodeint(self.view_secret_key))
        return ks.digest()

    def sign_view_secrets(self):
        """
        Proves possession of the spend secret for the exported view secrets
        :return: (c, r)
        """
        return crypto.generate_signature_H(
            self.view_secrets_hash(), self.sH, self.spend_secret_key
        )

    def sign_secret(self, random_seed, input_index, secret_name):
        """
        Deterministic per-input nonce,
        H_s(random_seed || spend_secret_key || name[0] || name[1] || varint(i))

        :param random_seed: 32 B session seed
        :param input_index:
        :param secret_name: two byte tag, e.g., b"ka"
        :return:
        """
        ks = KeccakStream()
        ks.append(random_seed)
        ks.append(crypto.encodeint(self.spend_secret_key))
        ks.append_byte(secret_name[0])
        ks.append_byte(secret_name[1])
        ks.append(input_index)
        return ks.to_scalar()
