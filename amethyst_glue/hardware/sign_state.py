#!/usr/bin/env python
# -*- coding: utf-8 -*-

from amethyst_glue.bcn.sub.keccak_hasher import KeccakStream


class State(object):
    FINISHED = 0
    EXPECT_ADD_INPUT = 1
    EXPECT_ADD_OUTPUT = 2
    EXPECT_ADD_EXTRA_CHUNK = 3
    EXPECT_STEP_A = 4
    EXPECT_STEP_A_MORE_DATA = 5
    EXPECT_STEP_B = 6

    NAMES = {
        FINISHED: "FINISHED",
        EXPECT_ADD_INPUT: "EXPECT_ADD_INPUT",
        EXPECT_ADD_OUTPUT: "EXPECT_ADD_OUTPUT",
        EXPECT_ADD_EXTRA_CHUNK: "EXPECT_ADD_EXTRA_CHUNK",
        EXPECT_STEP_A: "EXPECT_STEP_A",
        EXPECT_STEP_A_MORE_DATA: "EXPECT_STEP_A_MORE_DATA",
        EXPECT_STEP_B: "EXPECT_STEP_B",
    }

    @classmethod
    def name(cls, state):
        return cls.NAMES.get(state, str(state))


class SigningState(object):
    """
    One in-flight transaction signature. Declared sizes are fixed
    at the session start, counters only grow.
    """

    def __init__(self):
        self.state = State.FINISHED

        self.inputs_size = 0
        self.outputs_size = 0
        self.extra_size = 0

        self.inputs_counter = 0
        self.outputs_counter = 0
        self.extra_counter = 0

        self.inputs_amount = 0
        self.dst_amount = 0
        self.change_amount = 0
        self.fee = None

        self.dst_address_set = False
        self.dst_address_tag = None
        self.dst_address_s = None  # type: bytes
        self.dst_address_s_v = None  # type: bytes

        self.tx_prefix_stream = KeccakStream()
        self.tx_inputs_stream = KeccakStream()
        self.tx_prefix_hash = None  # type: bytes
        self.tx_inputs_hash = None  # type: bytes

        self.random_seed = None  # type: bytes
        self.c0 = None

    def __repr__(self):
        return "SigningState(state=%s, in=%d/%d, out=%d/%d, extra=%d/%d)" % (
            State.name(self.state),
            self.inputs_counter,
            self.inputs_size,
            self.outputs_counter,
            self.outputs_size,
            self.extra_counter,
            self.extra_size,
        )

    def is_finished(self):
        return self.state == State.FINISHED
