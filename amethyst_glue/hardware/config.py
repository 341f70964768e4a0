#!/usr/bin/env python
# -*- coding: utf-8 -*-

import os

from amethyst_glue.bcn import common
from amethyst_glue.compat import log


RANDOM_SEED_SIZE = 32
ZERO_RANDOM_SEED = bytes(RANDOM_SEED_SIZE)

# Process-wide default, None means the system CSPRNG
RANDOM_SOURCE = None


def system_random_source():
    return common.random_bytes(RANDOM_SEED_SIZE)


def zero_random_source():
    """
    All-zero session seed. Makes signing nonces reproducible, test builds only.
    :return:
    """
    log.warning(__name__, "Using all-zero signing session seed, not for production")
    return ZERO_RANDOM_SEED


def get_zero_random_seed():
    en = os.getenv("AMETHYST_ZERO_RANDOM_SEED", None)
    if en is None:
        return False
    return en.strip().lower() in ("1", "true", "yes", "on")


def get_random_source():
    """
    Random source for the signing session seed, callable returning 32 B
    :return:
    """
    if get_zero_random_seed():
        return zero_random_source

    return RANDOM_SOURCE if RANDOM_SOURCE is not None else system_random_source


def set_random_source(x):
    global RANDOM_SOURCE
    if get_zero_random_seed():
        raise ValueError(
            "Could not override Environment variable AMETHYST_ZERO_RANDOM_SEED"
        )

    RANDOM_SOURCE = x
