#!/usr/bin/env python
# -*- coding: utf-8 -*-

from amethyst_glue.bcn.common import BcnException


class EmulatorError(BcnException):
    """
    Base of all device errors. Keyword arguments are kept as attributes.
    Raised in a signing session it terminates the session.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args)
        for kw in kwargs:
            setattr(self, kw, kwargs[kw])


class InvalidMnemonic(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class ProtocolOrderViolation(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class AmountOverflow(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class NegativeFee(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class InconsistentDestination(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class DeviceMismatch(EmulatorError):
    """
    Attached hardware computed a different deterministic value.
    Either tampered or incompatible device.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class Invariant(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class InvalidArgument(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class ActionCancelled(EmulatorError):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


def invariant(condition, exc_type=Invariant, msg=None, **kwargs):
    """
    Raises exc_type if condition does not hold
    :param condition:
    :param exc_type:
    :param msg:
    :return:
    """
    if condition:
        return
    raise exc_type(msg or "Invariant violated", **kwargs)
