from amethyst_glue.bcn import common, crypto


class KeccakStream(object):
    """
    Append-only transcript. Reducers hash the whole accumulated buffer
    and leave it untouched, so they can be called repeatedly.
    """

    def __init__(self, data=None):
        self.ba = bytearray()
        if data is not None:
            self.append(data)

    def __len__(self):
        return len(self.ba)

    def __repr__(self):
        return "KeccakStream(len=%d)" % len(self.ba)

    def copy(self):
        r = KeccakStream()
        r.ba = bytearray(self.ba)
        return r

    def append(self, data):
        """
        Bytes are appended verbatim, unsigned integers as varints.
        :param data:
        :return:
        """
        if isinstance(data, int):
            self.ba += common.dump_uvarint_b(data)
        else:
            self.ba += bytes(data)
        return self

    def append_byte(self, b):
        if b < 0 or b > 0xFF:
            raise ValueError("Byte out of range: %s" % b)
        self.ba.append(b)
        return self

    def digest(self):
        return crypto.cn_fast_hash(self.ba)

    def to_scalar(self):
        return crypto.hash_to_scalar(self.ba)

    def to_point(self):
        return crypto.hash_to_good_point(self.ba)
