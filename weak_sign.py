import secrets
from collections import namedtuple

from ec_curve import EC_add, EC_multi, base_multi, inv
from sig_codec import hash_to_int, sm3_digest

PublicKey = namedtuple('PublicKey', ['curve', 'x', 'y'])
PrivateKey = namedtuple('PrivateKey', ['public_key', 'd'])

DEFAULT_ID = b'1234567812345678'


def point_of(pub):
    return (pub.x, pub.y)


# 生成公私钥对
def key_gen(curve):
    sk = secrets.randbelow(curve.n - 1) + 1  # private key
    return weak_key_gen(sk, curve)


def key_matches(priv):
    """私钥 d 是否与其公钥对应"""
    pub = priv.public_key
    return base_multi(priv.d, pub.curve) == point_of(pub)


def weak_key_gen(d, curve):
    """由指定的私钥 d 构造密钥对"""
    d %= curve.n
    if d == 0:
        return None
    x, y = base_multi(d, curve)
    return PrivateKey(PublicKey(curve, x, y), d)


# 使用ECDSA签名算法签名，k 由调用者指定
def ECDSA_sign_and_assign_k(k, priv, digest):
    curve = priv.public_key.curve
    N = curve.n
    k %= N
    k_inv = inv(k, N)
    if k_inv is None:
        return None, None
    R = base_multi(k, curve)
    r = R[0] % N  # Rx mod n
    if r == 0:
        return None, None
    e = hash_to_int(digest, curve)
    s = k_inv * (e + priv.d * r) % N
    if s == 0:
        return None, None
    return r, s


# 使用sm2签名算法签名，k 由调用者指定
def sm2_sign_and_assign_k(k, priv, digest):
    curve = priv.public_key.curve
    N = curve.n
    k %= N
    if k == 0:
        return None, None
    e = int.from_bytes(digest, 'big')
    x1, _ = base_multi(k, curve)  # (x1, y1) = kG
    r = (e + x1) % N  # r = (e + x1) % n
    if r == 0 or r + k == N:
        return None, None
    d_inv = inv(1 + priv.d, N)
    if d_inv is None:
        return None, None
    s = d_inv * (k - r * priv.d) % N
    if s == 0:
        return None, None
    return r, s


def ECDSA_sign(priv, digest):
    N = priv.public_key.curve.n
    while 1:
        k = secrets.randbelow(N)
        r, s = ECDSA_sign_and_assign_k(k, priv, digest)
        if r is not None:
            return r, s


# SM2签名
def sm2_sign(priv, digest):
    N = priv.public_key.curve.n
    while 1:
        k = secrets.randbelow(N)  # generate random number k
        r, s = sm2_sign_and_assign_k(k, priv, digest)
        if r is not None:
            return r, s


def ECDSA_verify(pub, digest, sig):
    curve = pub.curve
    N = curve.n
    r, s = sig
    if not (0 < r < N and 0 < s < N):
        return False
    e = hash_to_int(digest, curve)
    w = inv(s, N)
    dot = EC_add(base_multi(e * w, curve), EC_multi(r * w, point_of(pub), curve), curve)
    if dot == 0:
        return False
    return dot[0] % N == r


# SM2验签
def sm2_verify(pub, digest, sig):
    """SM2 verify algorithm
    :param pub: public key
    :param digest: e = SM3(Z_A || M)
    :param sig: (r, s)
    :return: true/false
    """
    curve = pub.curve
    N = curve.n
    r, s = sig
    if not (0 < r < N and 0 < s < N):
        return False
    e = int.from_bytes(digest, 'big')
    t = (r + s) % N
    if t == 0:
        return False
    dot = EC_add(base_multi(s, curve), EC_multi(t, point_of(pub), curve), curve)  # (x1, y1) = sG + tP
    if dot == 0:
        return False
    return (e + dot[0]) % N == r


def precompute(ID, pub):
    """compute ZA = SM3(ENTL||ID||a||b||GX||GY||xA||yA)"""
    curve = pub.curve
    size = (curve.p.bit_length() + 7) // 8
    if isinstance(ID, str):
        ID = bytes(ID, encoding='utf-8')
    ENTL = (len(ID) * 8).to_bytes(2, 'big')
    joint = ENTL + ID
    for v in (curve.a, curve.b, curve.gx, curve.gy, pub.x, pub.y):
        joint += v.to_bytes(size, 'big')
    return sm3_digest(joint)


def sm2_digest(ID, pub, msg):
    """e = SM3(ZA || M)"""
    if isinstance(msg, str):
        msg = bytes(msg, encoding='utf-8')
    return sm3_digest(precompute(ID, pub) + msg)
