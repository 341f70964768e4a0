#!/usr/bin/env python
# -*- coding: utf-8 -*-
#
# Thin wrapper over logging so modules log under their own name,
# log.debug(__name__, "msg %s", arg)

import binascii
import logging


def debug(name, msg, *args):
    logging.getLogger(name).debug(msg, *args)


def info(name, msg, *args):
    logging.getLogger(name).info(msg, *args)


def warning(name, msg, *args):
    logging.getLogger(name).warning(msg, *args)


def exception(name, exc):
    logging.getLogger(name).error("%s: %s", exc.__class__.__name__, exc)


def hexval(value):
    """
    Hex representation of bytes-like or EC values for log messages
    :param value:
    :return:
    """
    if value is None or isinstance(value, (int, str)):
        return value
    return binascii.hexlify(bytes(value)).decode("ascii")
