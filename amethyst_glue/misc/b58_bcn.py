#!/usr/bin/env python
# -*- coding: utf-8 -*-
# base58 for CryptoNote addresses - working in 8-byte blocks
#
# Eight bytes converts to 11 Base58 characters, shorter blocks are padded with "1"s
# (1 is 0 in Base58) to the length given by the encoded block size table.
# The last block may be shorter than 8 bytes.

__b58chars = b"123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
__b58base = len(__b58chars)

FULL_BLOCK_SIZE = 8
FULL_ENCODED_BLOCK_SIZE = 11
ENCODED_BLOCK_SIZES = [0, 2, 3, 5, 6, 7, 9, 10, 11]


def _encode_block(block):
    num = int.from_bytes(block, "big")
    size = ENCODED_BLOCK_SIZES[len(block)]
    res = bytearray(__b58chars[0:1] * size)
    i = size - 1
    while num > 0:
        num, mod = divmod(num, __b58base)
        res[i] = __b58chars[mod]
        i -= 1
    return bytes(res)


def _decode_block(block):
    if len(block) not in ENCODED_BLOCK_SIZES:
        raise ValueError("Invalid encoded block length")
    size = ENCODED_BLOCK_SIZES.index(len(block))

    num = 0
    for c in block:
        digit = __b58chars.find(bytes([c]))
        if digit < 0:
            raise ValueError("Invalid base58 character")
        num = num * __b58base + digit

    if num >= (1 << (8 * size)):
        raise ValueError("Block overflow")
    return num.to_bytes(size, "big")


def b58encode(data_bin):
    """
    Encodes binary data, returns bytes
    :param data_bin:
    :return:
    """
    res = bytearray()
    for i in range(0, len(data_bin), FULL_BLOCK_SIZE):
        res += _encode_block(data_bin[i : i + FULL_BLOCK_SIZE])
    return bytes(res)


def b58decode(data_enc):
    """
    Decodes base58 string to binary data
    :param data_enc: str or bytes
    :return:
    """
    if isinstance(data_enc, str):
        data_enc = data_enc.encode("ascii")

    res = bytearray()
    for i in range(0, len(data_enc), FULL_ENCODED_BLOCK_SIZE):
        res += _decode_block(data_enc[i : i + FULL_ENCODED_BLOCK_SIZE])
    return bytes(res)
