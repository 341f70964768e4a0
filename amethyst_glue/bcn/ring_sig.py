#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Ring signature verification requests and single-request checks.
# The device produces only the signer's ring member, the rest of the
# ring is closed here, on the host.

from amethyst_glue.bcn import crypto


class RingSignatureArg(object):
    """
    Classic CryptoNote ring signature check request, one per input
    """

    def __init__(
        self,
        tx_prefix_hash=None,
        key_image=None,
        output_keys=None,
        input_signature=None,
        newest_referenced_height=0,
    ):
        self.tx_prefix_hash = tx_prefix_hash
        self.newest_referenced_height = newest_referenced_height
        self.key_image = key_image
        self.output_keys = output_keys or []
        self.input_signature = input_signature or []  # [(c, r)]


class RingSignatureAmethyst(object):
    """
    Aggregated signature over all inputs of the transaction
    """

    def __init__(self, c0=None, rb=None, rc=None, ra=None):
        self.c0 = c0
        self.rb = rb or []
        self.rc = rc or []
        self.ra = ra or []  # [[ra_j for ring member j] for input i]


class RingSignatureArgA(object):
    """
    Amethyst signature check request, one per transaction
    """

    def __init__(
        self,
        tx_prefix_hash=None,
        key_images=None,
        ps=None,
        output_keys=None,
        input_signature=None,
        newest_referenced_height=0,
    ):
        self.tx_prefix_hash = tx_prefix_hash
        self.newest_referenced_height = newest_referenced_height
        self.key_images = key_images or []
        self.ps = ps or []
        self.output_keys = output_keys or []
        self.input_signature = input_signature


def generate_ring_signature(prefix_hash, image, pubs, sec, sec_idx):
    """
    Generates ring signature with key image.
    void crypto_ops::generate_ring_signature()

    :param prefix_hash:
    :param image: key image, sec * H_p(pubs[sec_idx])
    :param pubs: ring
    :param sec:
    :param sec_idx:
    :return: [(c, r)]
    """
    buff = bytearray(prefix_hash)
    sum = crypto.sc_0()
    k = crypto.sc_0()
    sig = [[crypto.sc_0(), crypto.sc_0()] for _ in pubs]

    for i, pub in enumerate(pubs):
        hp = crypto.hash_to_good_point(crypto.encodepoint(pub))
        if i == sec_idx:
            k = crypto.random_scalar()
            buff += crypto.encodepoint(crypto.scalarmult_base(k))
            buff += crypto.encodepoint(crypto.scalarmult(hp, k))

        else:
            sig[i] = [crypto.random_scalar(), crypto.random_scalar()]
            c, r = sig[i]
            buff += crypto.encodepoint(
                crypto.point_add(crypto.scalarmult_base(r), crypto.scalarmult(pub, c))
            )
            buff += crypto.encodepoint(
                crypto.point_add(crypto.scalarmult(hp, r), crypto.scalarmult(image, c))
            )
            sum = crypto.sc_add(sum, c)

    h = crypto.hash_to_scalar(buff)
    sig[sec_idx][0] = crypto.sc_sub(h, sum)
    sig[sec_idx][1] = crypto.sc_mulsub(sig[sec_idx][0], sec, k)
    return [tuple(x) for x in sig]


def check_ring_signature(prefix_hash, image, pubs, sig):
    """
    Checks ring signature generated with generate_ring_signature
    """
    if len(sig) != len(pubs):
        return False

    buff = bytearray(prefix_hash)
    sum = crypto.sc_0()
    for pub, (c, r) in zip(pubs, sig):
        hp = crypto.hash_to_good_point(crypto.encodepoint(pub))
        buff += crypto.encodepoint(
            crypto.point_add(crypto.scalarmult_base(r), crypto.scalarmult(pub, c))
        )
        buff += crypto.encodepoint(
            crypto.point_add(crypto.scalarmult(hp, r), crypto.scalarmult(image, c))
        )
        sum = crypto.sc_add(sum, c)

    h = crypto.sc_sub(crypto.hash_to_scalar(buff), sum)
    return not crypto.sc_isnonzero(h)


def check_ring_signature_arg(arg):
    """
    :param arg:
    :type arg: RingSignatureArg
    :return:
    """
    return check_ring_signature(
        arg.tx_prefix_hash, arg.key_image, arg.output_keys, arg.input_signature
    )


#
# Amethyst
#


def key_image_base(key_image):
    """
    B = H_p(I)
    :param key_image:
    :return:
    """
    return crypto.hash_to_good_point(crypto.encodepoint(key_image))


def ring_member(G_plus_B, key_image, p, pub, c, ra):
    """
    x = ra*(G + B) + c*(P - p), y = ra*H_p(P) + c*I
    :return: (x, y)
    """
    x = crypto.point_add(
        crypto.scalarmult(G_plus_B, ra), crypto.scalarmult(crypto.point_sub(pub, p), c)
    )
    y = crypto.point_add(
        crypto.scalarmult(crypto.hash_to_good_point(crypto.encodepoint(pub)), ra),
        crypto.scalarmult(key_image, c),
    )
    return x, y


def ring_challenge(x, y):
    return crypto.hash_to_scalar(crypto.encodepoint(x) + crypto.encodepoint(y))


def amethyst_ring_tail(ring, sec_index, p, key_image, x, y, ra=None):
    """
    Continues the challenge chain after the signer up to the end of the ring.

    :param ring: output public keys of the input
    :param sec_index: position of the signer
    :param p: sig_p from sign_step_a
    :param key_image:
    :param x: signer's x from sign_step_a
    :param y: signer's y from sign_step_a
    :param ra: responses, filled in place for positions after the signer
    :return: (data for sign_step_a_more_data, ra)
    """
    ra = ra if ra is not None else [None] * len(ring)
    G_plus_B = crypto.point_add(crypto.BASE, key_image_base(key_image))

    for j in range(sec_index + 1, len(ring)):
        c = ring_challenge(x, y)
        ra[j] = crypto.random_scalar()
        x, y = ring_member(G_plus_B, key_image, p, ring[j], c, ra[j])

    return crypto.encodepoint(x) + crypto.encodepoint(y), ra


def amethyst_ring_head(ring, sec_index, p, key_image, c0, ra):
    """
    Starts the chain at c0 and runs it up to the signer.

    :param ring:
    :param sec_index:
    :param p:
    :param key_image:
    :param c0: aggregated challenge from sign_get_c0
    :param ra: responses, filled in place for positions before the signer
    :return: (my_c for sign_step_b, ra)
    """
    G_plus_B = crypto.point_add(crypto.BASE, key_image_base(key_image))

    c = c0
    for j in range(sec_index):
        ra[j] = crypto.random_scalar()
        x, y = ring_member(G_plus_B, key_image, p, ring[j], c, ra[j])
        c = ring_challenge(x, y)
    return c, ra


def check_ring_signature_amethyst(arg):
    """
    Rebuilds the inputs transcript from responses and checks it hashes to c0.

    :param arg:
    :type arg: RingSignatureArgA
    :return:
    """
    sig = arg.input_signature
    n = len(arg.key_images)
    if sig is None or n == 0:
        return False
    if not (len(arg.ps) == len(arg.output_keys) == len(sig.rb) == len(sig.rc) == len(sig.ra) == n):
        return False

    H = crypto.get_H()
    buff = bytearray(arg.tx_prefix_hash)
    for i in range(n):
        ring = arg.output_keys[i]
        ras = sig.ra[i]
        if not ring or len(ras) != len(ring):
            return False

        key_image = arg.key_images[i]
        p = arg.ps[i]
        B = key_image_base(key_image)
        G_plus_B = crypto.point_add(crypto.BASE, B)

        z = crypto.point_add(
            crypto.point_add(crypto.scalarmult(H, sig.rb[i]), crypto.scalarmult(B, sig.rc[i])),
            crypto.scalarmult(p, sig.c0),
        )

        c = sig.c0
        for pub, ra in zip(ring, ras):
            x, y = ring_member(G_plus_B, key_image, p, pub, c, ra)
            c = ring_challenge(x, y)

        buff += crypto.encodepoint(p)
        buff += crypto.encodepoint(z)
        buff += crypto.encodepoint(x)
        buff += crypto.encodepoint(y)

    return crypto.sc_eq(crypto.hash_to_scalar(buff), sig.c0)
