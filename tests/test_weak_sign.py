import pytest

from ec_curve import P256, SM2P256, base_multi
from sig_codec import hash_to_int, sig_to_hex, Signature, sm3_digest
from weak_sign import (DEFAULT_ID, ECDSA_sign, ECDSA_sign_and_assign_k, ECDSA_verify, key_gen,
                       key_matches, precompute, sm2_digest, sm2_sign, sm2_sign_and_assign_k,
                       sm2_verify, weak_key_gen)

DIGEST = sm3_digest('dfq202100460092')


def test_key_gen():
    priv = key_gen(P256)
    assert 0 < priv.d < P256.n
    assert key_matches(priv)
    assert weak_key_gen(P256.n, P256) is None
    assert weak_key_gen(5, P256).public_key.x == base_multi(5, P256)[0]


def test_ecdsa_sign_verify(p256_priv, ecdsa_lib_verify):
    sig = ECDSA_sign(p256_priv, DIGEST)
    assert ECDSA_verify(p256_priv.public_key, DIGEST, sig)
    assert ecdsa_lib_verify(p256_priv.public_key, hash_to_int(DIGEST, P256), sig)
    assert not ECDSA_verify(p256_priv.public_key, sm3_digest('other'), sig)


def test_ecdsa_assigned_k_is_deterministic(p256_priv):
    sig1 = ECDSA_sign_and_assign_k(222, p256_priv, DIGEST)
    sig2 = ECDSA_sign_and_assign_k(222, p256_priv, DIGEST)
    assert sig1 == sig2
    assert sig1[0] == base_multi(222, P256)[0] % P256.n


def test_ecdsa_degenerate_nonce(p256_priv):
    assert ECDSA_sign_and_assign_k(0, p256_priv, DIGEST) == (None, None)
    assert ECDSA_sign_and_assign_k(P256.n, p256_priv, DIGEST) == (None, None)


def test_sm2_sign_verify(sm2_priv, gmssl_verify):
    sig = sm2_sign(sm2_priv, DIGEST)
    assert sm2_verify(sm2_priv.public_key, DIGEST, sig)
    assert gmssl_verify(sm2_priv.public_key, DIGEST, sig)
    assert not sm2_verify(sm2_priv.public_key, sm3_digest('other'), sig)


@pytest.mark.parametrize('k', [222, 0x1122334455667788, 2 ** 255 + 7])
def test_sm2_assigned_k_matches_gmssl(sm2_priv, gmssl_crypt, k):
    sig = sm2_sign_and_assign_k(k, sm2_priv, DIGEST)
    expected = gmssl_crypt(priv=sm2_priv).sign(DIGEST, '%064x' % k)
    assert sig_to_hex(Signature(*sig), SM2P256) == expected


def test_sm2_degenerate_nonce(sm2_priv):
    assert sm2_sign_and_assign_k(0, sm2_priv, DIGEST) == (None, None)
    # r + k == n
    k = 0x1234
    x1 = base_multi(k, SM2P256)[0]
    e = (SM2P256.n - k - x1) % SM2P256.n
    assert sm2_sign_and_assign_k(k, sm2_priv, e.to_bytes(32, 'big')) == (None, None)
    # r == 0
    e = (-x1) % SM2P256.n
    assert sm2_sign_and_assign_k(k, sm2_priv, e.to_bytes(32, 'big')) == (None, None)


def test_verify_rejects_out_of_range(p256_priv, sm2_priv):
    assert not ECDSA_verify(p256_priv.public_key, DIGEST, (0, 1))
    assert not ECDSA_verify(p256_priv.public_key, DIGEST, (1, P256.n))
    assert not sm2_verify(sm2_priv.public_key, DIGEST, (SM2P256.n, 1))
    assert not sm2_verify(sm2_priv.public_key, DIGEST, (1, 0))


def test_sm2_digest(sm2_priv):
    pub = sm2_priv.public_key
    za = precompute(DEFAULT_ID, pub)
    assert len(za) == 32
    assert sm2_digest(DEFAULT_ID, pub, 'msg') == sm3_digest(za + b'msg')
    assert precompute('ALICE', pub) == precompute(b'ALICE', pub)
    assert precompute(b'A1', pub) != precompute(b'A2', pub)
