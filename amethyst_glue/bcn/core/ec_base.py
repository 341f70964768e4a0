#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Resources:
# https://cr.yp.to
# https://github.com/monero-project/mininero
# https://github.com/monero-project/research-lab

from amethyst_glue.bcn.core.backend import ed25519
from amethyst_glue.bcn.core.backend.ed25519 import d, l, q

# py constants
py_q = q
py_l = l
py_d = d

py_fe_sqrtm1 = (
    fe_sqrtm1
) = 0x2B8324804FC1DF0B2B4D00993DFBD7A72F431806AD2FE478C4EE1B274A0EA0B0  # sqrt(-1)

# fe_A = 2 * (1 - ed25519.d) * ed25519.inv(1 + ed25519.d)
py_fe_A = fe_A = 486662

# Monero C-values used by ge_fromfe_frombytes_vartime
py_fe_fffb1 = (
    fe_fffb1
) = (
    0x018e04102529e4e8df563ac8be04e61c2e6bfb5746d58c72dd58968acde3bdff
)  # sqrt(-2 * A * (A + 2))
py_fe_fffb2 = (
    fe_fffb2
) = (
    0x32f9e1f5fba5d3096e2bae483fe9a041ae21fcb9fba908202d219b7c9f83650d
)  # sqrt( 2 * A * (A + 2))
py_fe_fffb3 = (
    fe_fffb3
) = (
    0x18b5eef2eb3df710476ab9bfc0f25d12bfdb00b15a69bdd6a7e48278e8cfd387
)  # sqrt(-sqrt(-1*a) * A * (A + 2))
py_fe_fffb4 = (
    fe_fffb4
) = (
    0x1a43f3031067dbf926c0f4887ef7432eee46fc08a13f4a49853d1903b6b39186
)  # sqrt( sqrt(-1*a) * A * (A + 2))


def fe_mod(a):
    return a % q


def fe_expmod(b, e):
    return ed25519.expmod(b, e, q)
