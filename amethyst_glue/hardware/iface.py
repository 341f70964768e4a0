#!/usr/bin/env python
# -*- coding: utf-8 -*-

from amethyst_glue.compat import log


class HardwareWallet(object):
    """
    Operation set of the signing device. The emulator implements it and
    optionally mirrors every call to another implementation (a real device).

    Points, scalars and hashes cross this boundary as 32 B bytes.
    """

    def get_hardware_type(self):
        raise NotImplementedError()

    def get_wallet_key(self):
        raise NotImplementedError()

    def get_A_plus_SH(self):
        raise NotImplementedError()

    def get_v_mul_A_plus_SH(self):
        raise NotImplementedError()

    def get_public_view_key(self):
        raise NotImplementedError()

    def mul_by_view_secret_key(self, output_public_keys):
        raise NotImplementedError()

    def generate_keyimage(self, output_public_key, inv_output_secret_hash, address_index):
        raise NotImplementedError()

    def generate_output_seed(self, tx_inputs_hash, out_index):
        raise NotImplementedError()

    def sign_start(self, version, unlock_time, inputs_size, outputs_size, extra_size):
        raise NotImplementedError()

    def sign_add_input(self, amount, output_indexes, inv_output_secret_hash, address_index):
        raise NotImplementedError()

    def sign_add_output(
        self, change, amount, change_address_index, dst_address_tag, dst_address_s, dst_address_s_v
    ):
        raise NotImplementedError()

    def sign_add_extra(self, chunk):
        raise NotImplementedError()

    def sign_step_a(self, inv_output_secret_hash, address_index):
        raise NotImplementedError()

    def sign_step_a_more_data(self, data):
        raise NotImplementedError()

    def sign_get_c0(self):
        raise NotImplementedError()

    def sign_step_b(self, inv_output_secret_hash, address_index, my_c):
        raise NotImplementedError()

    def proof_start(self, data):
        raise NotImplementedError()

    def export_view_only(self):
        raise NotImplementedError()


class EmulatorInterface(object):
    """
    User facing part of the device. Default implementation confirms
    everything and drops traces.
    """

    def __init__(self, ctx=None):
        self.ctx = ctx

    def confirm_output(self, dst_address_tag, dst_address_s, dst_address_s_v, dst_amount):
        """
        Do you wish to send dst_amount to the destination?
        :param dst_address_tag:
        :param dst_address_s:
        :param dst_address_s_v:
        :param dst_amount:
        :return:
        """
        return True

    def confirm_fee(self, fee):
        return True

    def confirm_view_outgoing_addresses(self):
        """
        Whether the view-only export may include the tx derivation seed
        :return:
        """
        return True

    def transaction_error(self, e):
        """
        Signing session was terminated by the error e
        :param e:
        :return:
        """

    def trace(self, name, value, index=None):
        """
        Derived value sink, no-op
        :param name:
        :param value:
        :param index: input / output index if applicable
        :return:
        """


class LoggingInterface(EmulatorInterface):
    """
    Forwards traces to the debug log. Development only.
    """

    def __init__(self, ctx=None, logger_name=None):
        super().__init__(ctx)
        self.logger_name = logger_name or __name__

    def trace(self, name, value, index=None):
        if index is None:
            log.debug(self.logger_name, "%s=%s", name, log.hexval(value))
        else:
            log.debug(self.logger_name, "%s[%s]=%s", name, index, log.hexval(value))
