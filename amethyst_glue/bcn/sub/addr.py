#!/usr/bin/env python
# -*- coding: utf-8 -*-

from amethyst_glue.bcn import common, crypto
from amethyst_glue.misc import b58_bcn


# Type tags of the serialized transaction parts
INPUT_KEY_TAG = 2
OUTPUT_KEY_TAG = 2

ADDRESS_TAG_SIMPLE = 0
ADDRESS_TAG_UNLINKABLE = 1

ADDRESS_PREFIXES = {
    ADDRESS_TAG_SIMPLE: 6,
    ADDRESS_TAG_UNLINKABLE: 572238,
}

ADDRESS_CHECKSUM_SIZE = 4


class AddrInfo(object):
    def __init__(self, tag=None, S=None, Sv=None):
        self.tag = tag
        self.S = S
        self.Sv = Sv

    def __repr__(self):
        return "AddrInfo(tag=%s)" % self.tag

    def __eq__(self, other):
        return (
            isinstance(other, AddrInfo)
            and self.tag == other.tag
            and self.S == other.S
            and self.Sv == other.Sv
        )

    def encode(self):
        return encode_address(self.tag, self.S, self.Sv)


def is_known_tag(tag):
    return tag in ADDRESS_PREFIXES


def generate_output_secrets(output_seed):
    """
    Expands the output seed public key to secret scalar, secret point
    and the address type byte.

    :param output_seed: output seed public key
    :return: (scalar, point, address type byte)
    """
    buff = crypto.encodepoint(output_seed)
    scalar = crypto.hash_to_scalar(buff)
    point = crypto.hash_to_good_point(buff)
    address_type = crypto.cn_fast_hash(buff)[0]
    return scalar, point, address_type


def linkable_derive_output_public_key(
    output_secret_scalar, tx_inputs_hash, output_index, address_S, address_V
):
    """
    Output key for the simple (linkable) address
    :param output_secret_scalar:
    :param tx_inputs_hash:
    :param output_index:
    :param address_S: spend public key
    :param address_V: view public key
    :return: (output public key, encrypted secret)
    """
    encrypted_secret = crypto.scalarmult(address_V, output_secret_scalar)
    derivation = crypto.scalarmult_base(output_secret_scalar)

    buff = (
        crypto.encodepoint(derivation)
        + bytes(tx_inputs_hash)
        + common.dump_uvarint_b(output_index)
    )
    derivation_hash = crypto.hash_to_scalar(buff)
    output_public_key = crypto.point_add(
        address_S, crypto.scalarmult_base(derivation_hash)
    )
    return output_public_key, encrypted_secret


def unlinkable_derive_output_public_key(
    output_secret_point, tx_inputs_hash, output_index, address_S, address_Sv
):
    """
    Output key for the unlinkable address, hides address_S
    :param output_secret_point:
    :param tx_inputs_hash:
    :param output_index:
    :param address_S:
    :param address_Sv:
    :return: (output public key, encrypted secret)
    """
    buff = (
        crypto.encodepoint(output_secret_point)
        + bytes(tx_inputs_hash)
        + common.dump_uvarint_b(output_index)
    )
    inv_output_secret_hash = crypto.sc_inv(crypto.hash_to_scalar(buff))

    output_public_key = crypto.scalarmult(address_S, inv_output_secret_hash)
    encrypted_secret = crypto.point_add(
        output_secret_point, crypto.scalarmult(address_Sv, inv_output_secret_hash)
    )
    return output_public_key, encrypted_secret


def compute_output(output_seed, tx_inputs_hash, output_index, dst_tag, dst_S, dst_Sv):
    """
    Deterministic output key material

    :param output_seed: public key from the device output seed derivation
    :param tx_inputs_hash:
    :param output_index:
    :param dst_tag: destination address tag
    :param dst_S:
    :param dst_Sv:
    :return: (output public key, encrypted secret, encrypted address type)
    """
    if not is_known_tag(dst_tag):
        raise ValueError("Unknown address tag: %s" % dst_tag)

    scalar, point, address_type = generate_output_secrets(output_seed)
    encrypted_address_type = dst_tag ^ address_type

    if dst_tag == ADDRESS_TAG_SIMPLE:
        pub, enc = linkable_derive_output_public_key(
            scalar, tx_inputs_hash, output_index, dst_S, dst_Sv
        )
    else:
        pub, enc = unlinkable_derive_output_public_key(
            point, tx_inputs_hash, output_index, dst_S, dst_Sv
        )
    return pub, enc, encrypted_address_type


def linkable_underive_address(
    view_secret_key, tx_inputs_hash, output_index, output_public_key, encrypted_secret
):
    """
    Recipient side of the linkable derivation, recovers the spend public key
    :param view_secret_key:
    :param tx_inputs_hash:
    :param output_index:
    :param output_public_key:
    :param encrypted_secret:
    :return: (address_S, derivation hash)
    """
    derivation = crypto.scalarmult(encrypted_secret, crypto.sc_inv(view_secret_key))
    buff = (
        crypto.encodepoint(derivation)
        + bytes(tx_inputs_hash)
        + common.dump_uvarint_b(output_index)
    )
    derivation_hash = crypto.hash_to_scalar(buff)
    address_S = crypto.point_sub(
        output_public_key, crypto.scalarmult_base(derivation_hash)
    )
    return address_S, derivation_hash


def unlinkable_underive_address_S_step1(view_secret_key, output_public_key):
    return crypto.scalarmult(output_public_key, view_secret_key)


def unlinkable_underive_address_S_step2(
    step1, tx_inputs_hash, output_index, encrypted_secret, output_public_key
):
    """
    Recipient side of the unlinkable derivation.

    :param step1: view_secret_key * output_public_key
    :param tx_inputs_hash:
    :param output_index:
    :param encrypted_secret:
    :param output_public_key:
    :return: (address_S, output secret hash)
    """
    output_secret_point = crypto.point_sub(encrypted_secret, step1)
    buff = (
        crypto.encodepoint(output_secret_point)
        + bytes(tx_inputs_hash)
        + common.dump_uvarint_b(output_index)
    )
    output_secret_hash = crypto.hash_to_scalar(buff)
    address_S = crypto.scalarmult(output_public_key, output_secret_hash)
    return address_S, output_secret_hash


def encode_address(tag, S, Sv):
    """
    Base58 address, varint(prefix) || S || Sv || checksum
    :param tag:
    :param S:
    :param Sv:
    :return: str
    """
    if not is_known_tag(tag):
        raise ValueError("Unknown address tag: %s" % tag)

    buf = (
        common.dump_uvarint_b(ADDRESS_PREFIXES[tag])
        + crypto.encodepoint(S)
        + crypto.encodepoint(Sv)
    )
    buf += crypto.cn_fast_hash(buf)[:ADDRESS_CHECKSUM_SIZE]
    return b58_bcn.b58encode(buf).decode("ascii")


def decode_address(addr):
    """
    Parses base58 address, checks the checksum and the prefix
    :param addr:
    :return: AddrInfo
    """
    d = b58_bcn.b58decode(addr)
    if len(d) <= ADDRESS_CHECKSUM_SIZE:
        raise ValueError("Address too short")

    body, checksum = d[:-ADDRESS_CHECKSUM_SIZE], d[-ADDRESS_CHECKSUM_SIZE:]
    if not common.ct_equal(crypto.cn_fast_hash(body)[:ADDRESS_CHECKSUM_SIZE], checksum):
        raise ValueError("Invalid address checksum")

    prefix, offset = common.load_uvarint_b(body)
    tags = [t for t, p in ADDRESS_PREFIXES.items() if p == prefix]
    if not tags:
        raise ValueError("Unknown address prefix: %s" % prefix)
    if len(body) - offset != 64:
        raise ValueError("Invalid address length")

    S = crypto.decodepoint(body[offset : offset + 32])
    Sv = crypto.decodepoint(body[offset + 32 : offset + 64])
    return AddrInfo(tags[0], S, Sv)
