from ec_curve import EC_add, EC_multi, P256, base_multi, inv, lift_x
from sig_codec import Signature, hash_to_int, int_to_digest, sm3_digest
from weak_sign import (ECDSA_sign, ECDSA_sign_and_assign_k, ECDSA_verify, PrivateKey, key_gen,
                       key_matches, point_of)

CURVE = P256


def ECDSA_malleable_sig(sig, n):
    """(r, s) 对 (M, d) 合法，则 (r, -s) 同样合法"""
    return Signature(sig.r, (n - sig.s) % n)


def ECDSA_zero_hash_forge(sig, a, curve):
    """
    sig 是摘要 e = 0 下的合法签名，构造另一个 e = 0 下的合法签名
    s = k^-1 * d * r，令 k' = a * k，则 r' = x(a * R)，s' = r' * s / (a * r)
    :return: 新签名，r 无法还原为曲线点或 a * r 不可逆时返回 None
    """
    N = curve.n
    R = lift_x(sig.r, curve)  # R = (r, ±y)，±kG 的横坐标相同
    if R is None:
        return None
    ar_inv = inv(a * sig.r, N)
    if ar_inv is None:
        return None
    R1 = EC_multi(a, R, curve)
    if R1 == 0:
        return None
    r1 = R1[0] % N
    if r1 == 0:
        return None
    s1 = r1 * sig.s * ar_inv % N
    return Signature(r1, s1)


def ECDSA_blind_forge(pub, a, b):
    """
    不知道私钥，构造 (r, s, e) 使 (r, s) 是摘要 e 在 pub 下的合法签名
    R = aG + bP, r = Rx mod n, s = r / b, e = a * s
    :return: (r, s, e)，b = 0 时为 (None, None, None)
    """
    curve = pub.curve
    N = curve.n
    if b % N == 0:
        return None, None, None
    R = EC_add(base_multi(a, curve), EC_multi(b, point_of(pub), curve), curve)
    if R == 0:
        return None, None, None
    r = R[0] % N
    if r == 0:
        return None, None, None
    s = r * inv(b, N) % N
    e = a * s % N
    return r, s, int_to_digest(e)


def ECDSA_recover_key_linear_k(pub, digest, sig1, sig2, a, b):
    """
    同一摘要的两个签名，随机数满足 k2 = a * k1 + b
    d = (b - e * (s2^-1 - a * s1^-1)) / (r2 * s2^-1 - r1 * a * s1^-1)
    :return: 私钥，分母为 0 时返回 None
    """
    curve = pub.curve
    N = curve.n
    e = hash_to_int(digest, curve)
    w1 = inv(sig1.s, N)  # s1^-1
    w2 = inv(sig2.s, N)  # s2^-1
    if w1 is None or w2 is None:
        return None
    d1 = (b - e * (w2 - a * w1)) % N
    d2 = (sig2.r * w2 - sig1.r * a * w1) % N
    if d2 == 0:
        return None
    D = d1 * inv(d2, N) % N
    if D == 0:
        return None
    return PrivateKey(pub, D)


def ECDSA_recover_key_leaked_k(pub, digest, sig, k):
    """k泄露导致d泄露: d = (s * k - e) / r"""
    N = pub.curve.n
    r_inv = inv(sig.r, N)
    if r_inv is None:
        return None
    e = hash_to_int(digest, pub.curve)
    D = (sig.s * k - e) * r_inv % N
    if D == 0:
        return None
    return PrivateKey(pub, D)


def ECDSA_recover_key_reused_k(pub, digest1, sig1, digest2, sig2):
    """
    对不同的消息使用相同的k签名导致d泄露
    k = (e1 - e2) / (s1 - s2)，再按 k 泄露求 d
    """
    if sig1.r != sig2.r:
        return None  # 两次签名的 k 不同
    curve = pub.curve
    N = curve.n
    ds_inv = inv(sig1.s - sig2.s, N)
    if ds_inv is None:
        return None
    e1 = hash_to_int(digest1, curve)
    e2 = hash_to_int(digest2, curve)
    k = (e1 - e2) * ds_inv % N
    return ECDSA_recover_key_leaked_k(pub, digest1, sig1, k)


def _show(name, v):
    print(name, '0x' + hex(v)[2:].rjust(64, '0'))


def _report(priv, recovered):
    if recovered is None:
        print("无法推导出私钥")
    elif recovered.d == priv.d and key_matches(recovered):
        _show("推导出的私钥：\t\t", recovered.d)
        print("推导出正确的私钥!!!")
    else:
        print("推导错误，与原私钥不等")


# 【1】k泄露导致d泄露
def ECDSA_leaking_k():
    priv = key_gen(CURVE)
    digest = sm3_digest("DFQ202100460092")
    k = 0x1234567890abcdef
    sig = Signature(*ECDSA_sign_and_assign_k(k, priv, digest))
    _show("A的私钥：\t\t", priv.d)
    _report(priv, ECDSA_recover_key_leaked_k(priv.public_key, digest, sig, k))


# 【2】对不同的消息使用相同的k签名导致d泄露
def ECDSA_reusing_k():
    priv = key_gen(CURVE)
    digest1 = sm3_digest("dfq")
    digest2 = sm3_digest("2021")
    k = 0xfedcba0987654321
    sig1 = Signature(*ECDSA_sign_and_assign_k(k, priv, digest1))
    sig2 = Signature(*ECDSA_sign_and_assign_k(k, priv, digest2))
    _show("A的私钥：\t\t", priv.d)
    _report(priv, ECDSA_recover_key_reused_k(priv.public_key, digest1, sig1, digest2, sig2))


# 【3】随机数线性相关 k2 = a * k1 + b 导致d泄露
def ECDSA_linear_k():
    priv = key_gen(CURVE)
    digest = b"12345678"
    a, b = 22, 34
    k1 = 0x5a5a5a5a5a5a5a5a5a5a
    k2 = (a * k1 + b) % CURVE.n
    sig1 = Signature(*ECDSA_sign_and_assign_k(k1, priv, digest))
    sig2 = Signature(*ECDSA_sign_and_assign_k(k2, priv, digest))
    _show("A的私钥：\t\t", priv.d)
    _report(priv, ECDSA_recover_key_linear_k(priv.public_key, digest, sig1, sig2, a, b))


# 【4】验证(r,s) and (r,-s)均为合法签名
def verify_Malleability():
    priv = key_gen(CURVE)
    digest = sm3_digest("dfq202100460092")
    sig = Signature(*ECDSA_sign(priv, digest))
    sig_m = ECDSA_malleable_sig(sig, CURVE.n)
    print("原签名 r，s 为：", sig.r, sig.s)
    print("验证 (r,-s)...")
    if ECDSA_verify(priv.public_key, digest, sig_m):
        print("验证通过!")
    else:
        print("验证失败!")


# 【5】摘要为0的签名可以派生出新的摘要为0的签名
def ECDSA_zero_hash():
    priv = key_gen(CURVE)
    digest = b"\x00"
    sig = Signature(*ECDSA_sign(priv, digest))
    sig_f = ECDSA_zero_hash_forge(sig, 3, CURVE)
    print("原签名：", sig)
    print("派生的签名：", sig_f)
    if sig_f is not None and ECDSA_verify(priv.public_key, digest, sig_f):
        print("验证通过...伪造成功!")
    else:
        print("验证失败...伪造未成功")


# 【6】不知道私钥，只用公钥伪造 (e, r, s)
def ECDSA_blind_forgery():
    priv = key_gen(CURVE)
    r, s, e = ECDSA_blind_forge(priv.public_key, 5, 444)
    print("伪造的摘要 e：", e.hex())
    print("伪造的签名 r，s 为：", r, s)
    if ECDSA_verify(priv.public_key, e, (r, s)):
        print("验证通过...伪造成功!")
    else:
        print("验证失败...伪造未成功")


if __name__ == '__main__':
    print("===============================k泄露导致d泄露====================================")
    ECDSA_leaking_k()
    print("")
    print("=======================对不同的消息使用相同的k签名导致d泄露===========================")
    ECDSA_reusing_k()
    print("")
    print("=======================随机数线性相关导致d泄露===========================")
    ECDSA_linear_k()
    print("")
    print("=======================验证(r,s) and (r,-s)均为合法签名=========================")
    verify_Malleability()
    print("")
    print("=======================摘要为0时的签名伪造=========================")
    ECDSA_zero_hash()
    print("")
    print("=======================不知道私钥伪造签名=========================")
    ECDSA_blind_forgery()
