from ec_curve import EC_add, EC_multi, SM2P256, base_multi, inv
from sig_codec import Signature, hash_to_int, int_to_digest
from weak_sign import (DEFAULT_ID, ECDSA_sign_and_assign_k, PrivateKey, key_gen, key_matches,
                       point_of, sm2_digest, sm2_sign_and_assign_k, sm2_verify)

CURVE = SM2P256

# SM2 签名满足 k = s + d * t，其中 t = s + r


def sm2_recover_key_linear_k(pub, sig1, sig2, a, b):
    """
    两个签名的随机数满足 k2 = a * k1 + b
    d = (b - (s2 - a * s1)) / (t2 - a * t1)
    :return: 私钥，分母为 0 时返回 None
    """
    N = pub.curve.n
    t1 = sig1.s + sig1.r
    t2 = sig2.s + sig2.r
    dt = (t2 - a * t1) % N
    if dt == 0:
        return None
    ds = (sig2.s - a * sig1.s) % N
    D = (b - ds) * inv(dt, N) % N
    if D == 0:
        return None
    return PrivateKey(pub, D)


def sm2_recover_k_relation(sig1, sig2, n):
    """
    同一私钥的两个签名，求与私钥无关的 (a, b) 使 k2 = a * k1 + b
    a = t2 / t1, b = s2 - a * s1
    :return: (a, b)，t1 不可逆时为 (None, None)
    """
    t1 = sig1.s + sig1.r
    t2 = sig2.s + sig2.r
    t1_inv = inv(t1, n)
    if t1_inv is None:
        return None, None
    a = t1_inv * t2 % n
    b = (sig2.s - a * sig1.s) % n
    return a, b


def sm2_recover_k(priv, sig):
    """已知私钥，k = s * (1 + d) + r * d"""
    N = priv.public_key.curve.n
    return (sig.s * (1 + priv.d) + sig.r * priv.d) % N


def sm2_blind_forge(pub, a, b):
    """
    不知道私钥，构造 (r, s, e) 使 (r, s) 是摘要 e 在 pub 下的合法签名
    x = (aG + bP)x, r = b - a, s = a, e = b - x - a
    :return: (r, s, e)，a = 0、a = b 或 b = 0 时为 (None, None, None)
    """
    curve = pub.curve
    N = curve.n
    if a % N == 0 or b % N == 0 or (b - a) % N == 0:
        return None, None, None
    R = EC_add(base_multi(a, curve), EC_multi(b, point_of(pub), curve), curve)
    if R == 0:
        return None, None, None
    x = R[0] % N
    r = (b - a) % N
    s = a % N
    e = (b - x - a) % N
    return r, s, int_to_digest(e)


def sm2_recover_key_leaked_k(pub, sig, k):
    """k泄露导致d泄露: d = (k - s) / (s + r)"""
    N = pub.curve.n
    t_inv = inv(sig.s + sig.r, N)
    if t_inv is None:
        return None
    D = (k - sig.s) * t_inv % N
    if D == 0:
        return None
    return PrivateKey(pub, D)


def sm2_recover_key_reused_k(pub, sig1, sig2):
    """对不同的消息使用相同的k: d = (s2 - s1) / (s1 - s2 + r1 - r2)"""
    return sm2_recover_key_linear_k(pub, sig1, sig2, 1, 0)


def recover_key_shared_dk(pub, digest, ecdsa_sig, sm2_sig):
    """
    ECDSA与SM2使用相同的d和k
    s1 * k = e1 + d * r1, k = s2 + d * (s2 + r2)
    d = (s1 * s2 - e1) / (r1 - s1 * s2 - s1 * r2)
    :param digest: ECDSA 签名的摘要
    """
    curve = pub.curve
    N = curve.n
    r1, s1 = ecdsa_sig
    r2, s2 = sm2_sig
    e1 = hash_to_int(digest, curve)
    den_inv = inv(r1 - s1 * s2 - s1 * r2, N)
    if den_inv is None:
        return None
    D = (s1 * s2 - e1) * den_inv % N
    if D == 0:
        return None
    return PrivateKey(pub, D)


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


def _sign(k, priv, msg, ID=DEFAULT_ID):
    digest = sm2_digest(ID, priv.public_key, msg)
    return Signature(*sm2_sign_and_assign_k(k, priv, digest))


# 【1】k泄露导致d泄露
def sm2_leaking_k():
    priv = key_gen(CURVE)
    k = 0x1122334455667788
    sig = _sign(k, priv, "dfq202100460092")
    _show("A的私钥：\t\t", priv.d)
    _report(priv, sm2_recover_key_leaked_k(priv.public_key, sig, k))


# 【2】对不同的消息重用随机数k从而导致d泄露
def sm2_reusing_k():
    priv = key_gen(CURVE)
    k = 0x8877665544332211
    sig1 = _sign(k, priv, "dfq1")
    sig2 = _sign(k, priv, "dfq2")
    _show("A的私钥：\t\t", priv.d)
    _report(priv, sm2_recover_key_reused_k(priv.public_key, sig1, sig2))


# 【3】两个不同的用户使用同一个k，则其中一个人可以推出另一个人的私钥d
def same_k_of_different_users():
    k = 0x0badc0ffee
    priv1 = key_gen(CURVE)
    priv2 = key_gen(CURVE)
    sig1 = _sign(k, priv1, "message from A1", b"A1")
    sig2 = _sign(k, priv2, "message from A2", b"A2")
    print("A2 推导 A1 的私钥：")
    _report(priv1, sm2_recover_key_leaked_k(priv1.public_key, sig1, k))
    print("A1 推导 A2 的私钥：")
    _report(priv2, sm2_recover_key_leaked_k(priv2.public_key, sig2, k))


# 【4】ECDSA与SM2使用相同的d和k导致d泄露
def same_dk_of_ECDSA_SM2():
    priv = key_gen(CURVE)
    k = 0x0ddba11
    digest1 = sm2_digest(DEFAULT_ID, priv.public_key, "ECDSA")
    sig1 = Signature(*ECDSA_sign_and_assign_k(k, priv, digest1))
    sig2 = _sign(k, priv, "sm2")
    _show("相同的私钥：\t\t", priv.d)
    _report(priv, recover_key_shared_dk(priv.public_key, digest1, sig1, sig2))


# 【5】随机数线性相关 k2 = a * k1 + b 导致d泄露
def sm2_linear_k():
    priv = key_gen(CURVE)
    a, b = 22, 34
    k1 = 0x5a5a5a5a5a5a5a5a5a5a
    k2 = (a * k1 + b) % CURVE.n
    sig1 = _sign(k1, priv, "12345678")
    sig2 = _sign(k2, priv, "12345678")
    _show("A的私钥：\t\t", priv.d)
    _report(priv, sm2_recover_key_linear_k(priv.public_key, sig1, sig2, a, b))
    ra, rb = sm2_recover_k_relation(sig1, sig2, CURVE.n)
    print("与私钥无关的随机数关系 a, b：", ra, rb)
    print("该关系成立：", k2 == (ra * k1 + rb) % CURVE.n)


# 【6】已知私钥恢复签名使用的k
def sm2_recover_k_from_key():
    priv = key_gen(CURVE)
    k = 222
    sig = _sign(k, priv, "12345678")
    print("恢复的 k：", sm2_recover_k(priv, sig), "原 k：", k)


# 【7】不知道私钥，只用公钥伪造 (e, r, s)
def sm2_blind_forgery():
    priv = key_gen(CURVE)
    r, s, e = sm2_blind_forge(priv.public_key, 1, 2)
    print("伪造的摘要 e：", e.hex())
    print("伪造的签名 r，s 为：", r, s)
    if sm2_verify(priv.public_key, e, (r, s)):
        print("验证通过...伪造成功!")
    else:
        print("验证失败...伪造未成功")


if __name__ == '__main__':
    print("===============================1.泄露随机数k从而导致d泄露=============================")
    sm2_leaking_k()
    print("")
    print("=======================2.对不同的消息重用随机数k从而导致d泄露===========================")
    sm2_reusing_k()
    print("")
    print("==================3.两个不同的用户使用同一个k，则其中一个人可以推出另一个人的私钥d===========")
    same_k_of_different_users()
    print("")
    print("========================4.使用相同的d和随机数k签发SM2和ECDSA，会导致d泄露================")
    same_dk_of_ECDSA_SM2()
    print("")
    print("========================5.随机数线性相关导致d泄露================")
    sm2_linear_k()
    print("")
    print("========================6.已知私钥恢复随机数k================")
    sm2_recover_k_from_key()
    print("")
    print("========================7.不知道私钥伪造签名================")
    sm2_blind_forgery()
