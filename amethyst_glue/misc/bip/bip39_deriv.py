import hashlib
import hmac

from Crypto.Protocol.KDF import PBKDF2
from mnemonic import Mnemonic


def normalize_mnemonics(words):
    """
    Lower case, single space separated word list
    :param words: string or iterable of words
    :return:
    """
    if isinstance(words, bytes):
        words = words.decode("utf8")
    if isinstance(words, str):
        words = words.split()
    else:
        words = [y for x in words for y in x.split()]
    return " ".join(x.strip().lower() for x in words)


def check_mnemonics(words, language="english"):
    """
    True if all words are in the wordlist and the checksum matches
    :param words: normalized mnemonic string
    :param language:
    :return:
    """
    return Mnemonic(language).check(words)


def mnemonics_to_seed(seed, passphrase=b""):
    if isinstance(seed, str):
        seed = seed.encode("utf8")
    salt = b"mnemonic" + passphrase

    def prf(p, s):
        hx = hmac.new(p, msg=s, digestmod=hashlib.sha512)
        return hx.digest()

    res = PBKDF2(password=seed, salt=salt, dkLen=64, prf=prf, count=2048)
    return res
