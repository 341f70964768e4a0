#!/usr/bin/env python
# -*- coding: utf-8 -*-

import hmac

from Crypto.Random import get_random_bytes


UINT64_MAX = 0xFFFFFFFFFFFFFFFF


class BcnException(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


def random_bytes(by):
    """
    Generates X random bytes, returns byte-string
    :param by:
    :return:
    """
    return get_random_bytes(by)


def ct_equal(a, b):
    """
    Constant time a,b comparisson
    :param a:
    :param b:
    :return:
    """
    return hmac.compare_digest(a, b)


def dump_uvarint_b(n):
    """
    Serializes unsigned integer to the CryptoNote varint.
    7 bits per byte, least significant group first, MSB is the continuation flag.
    :param n:
    :return:
    """
    if n < 0:
        raise ValueError("Cannot dump signed value, convert it first")

    buffer = bytearray()
    shifted = True
    while shifted:
        shifted = n >> 7
        buffer.append((n & 0x7F) | (0x80 if shifted else 0x00))
        n = shifted
    return bytes(buffer)


def load_uvarint_b(buffer, offset=0):
    """
    Parses CryptoNote varint, returns (value, new offset)
    :param buffer:
    :param offset:
    :return:
    """
    result = 0
    shift = 0
    while True:
        if offset >= len(buffer):
            raise ValueError("Truncated varint")
        byte = buffer[offset]
        offset += 1
        result += (byte & 0x7F) << shift
        shift += 7
        if byte & 0x80 == 0:
            return result, offset
