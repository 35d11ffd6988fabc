import pytest
from ecdsa import NIST256p, SECP256k1
from ecdsa.ecdsa import Public_key
from ecdsa.ecdsa import Signature as LibSignature
from ecdsa.ellipticcurve import Point
from gmssl import sm2

from ec_curve import P256, SECP256K1, SM2P256
from sig_codec import Signature, sig_to_hex
from weak_sign import weak_key_gen

LIB_CURVES = {'P-256': NIST256p, 'secp256k1': SECP256k1}


def _pub_hex(pub):
    return '%064x%064x' % (pub.x, pub.y)


@pytest.fixture
def ecdsa_lib_verify():
    """python-ecdsa 验签，e 为整数摘要"""

    def verify(pub, e, sig):
        lib = LIB_CURVES[pub.curve.name]
        key = Public_key(lib.generator, Point(lib.curve, pub.x, pub.y, lib.order))
        return key.verifies(e, LibSignature(sig[0], sig[1]))

    return verify


@pytest.fixture
def gmssl_crypt():
    def make(priv=None, pub=None):
        if pub is None:
            pub = priv.public_key
        private_key = '%064x' % priv.d if priv is not None else ''
        crypt = sm2.CryptSM2(private_key=private_key, public_key=_pub_hex(pub))
        crypt.public_key = _pub_hex(pub)  # 构造函数会剥掉 "04" 开头的字符
        return crypt

    return make


@pytest.fixture
def gmssl_verify(gmssl_crypt):
    """gmssl 验签，digest 为 32 字节摘要"""

    def verify(pub, digest, sig):
        crypt = gmssl_crypt(pub=pub)
        return bool(crypt.verify(sig_to_hex(Signature(*sig), SM2P256), digest))

    return verify


@pytest.fixture(params=[0x1d2c3b4a59687706, 0xc0ffee1234567890abcdef0123456789fedcba98765432100123456789abcdef])
def p256_priv(request):
    return weak_key_gen(request.param, P256)


@pytest.fixture
def k1_priv():
    return weak_key_gen(0x3a1e5b7c9d2f4e6a8b0c1d3e5f7a9b2c4d6e8f0a1b3c5d7e9f0a2b4c6d8e0f1a, SECP256K1)


@pytest.fixture(params=[0x7ab3c1, 0x128b2fa8bd433c6c068c8d803dff79792a519a55171b1b650c23661d15897263])
def sm2_priv(request):
    return weak_key_gen(request.param, SM2P256)
