from collections import namedtuple

# 曲线 y^2 = x^3 + a*x + b (mod p)，基点 G = (gx, gy)，阶 n，协因子 h
Curve = namedtuple('Curve', ['name', 'p', 'a', 'b', 'n', 'gx', 'gy', 'h'])

SECP256K1 = Curve(
    name='secp256k1',
    p=115792089237316195423570985008687907853269984665640564039457584007908834671663,
    a=0,
    b=7,
    n=115792089237316195423570985008687907852837564279074904382605163141518161494337,
    gx=55066263022277343669578718895168534326250603453777594175500187360389116729240,
    gy=32670510020758816978083085130507043184471273380659243275938904335757337482424,
    h=1,
)

P256 = Curve(
    name='P-256',
    p=0xffffffff00000001000000000000000000000000ffffffffffffffffffffffff,
    a=0xffffffff00000001000000000000000000000000fffffffffffffffffffffffc,  # -3
    b=0x5ac635d8aa3a93e7b3ebbd55769886bc651d06b0cc53b0f63bce3c3e27d2604b,
    n=0xffffffff00000000ffffffffffffffffbce6faada7179e84f3b9cac2fc632551,
    gx=0x6b17d1f2e12c4247f8bce6e563a440f277037d812deb33a0f4a13945d898c296,
    gy=0x4fe342e2fe1a7f9b8ee7eb4a7c0f9e162bce33576b315ececbb6406837bf51f5,
    h=1,
)

# SM2 推荐曲线参数
SM2P256 = Curve(
    name='SM2-P-256',
    p=0xfffffffeffffffffffffffffffffffffffffffff00000000ffffffffffffffff,
    a=0xfffffffeffffffffffffffffffffffffffffffff00000000fffffffffffffffc,  # -3
    b=0x28e9fa9e9d9f5e344d5a9e4bcf6509a7f39789f515ab8f92ddbcbd414d940e93,
    n=0xfffffffeffffffffffffffffffffffff7203df6b21c6052b53bbf40939d54123,
    gx=0x32c4ae2c1f1981195f9904466a39c9948fe30bbff2660be1715a4589334c74c7,
    gy=0xbc3736a2f4f6779c59bdcee36b692153d0a9877cc62a474002df32e52139f0a0,
    h=1,
)

CURVES = {c.name: c for c in (SECP256K1, P256, SM2P256)}


def get_curve(name):
    try:
        return CURVES[name]
    except KeyError:
        raise ValueError('unknown curve: %s' % name) from None


def base_point(curve):
    return (curve.gx, curve.gy)


def inv(a, n):
    '''求逆，不存在时返回 None'''

    def ext_gcd(a, b, arr):
        '''扩展欧几里得算法'''
        if b == 0:
            arr[0] = 1
            arr[1] = 0
            return a
        g = ext_gcd(b, a % b, arr)
        t = arr[0]
        arr[0] = arr[1]
        arr[1] = t - (a // b) * arr[1]
        return g

    a = a % n
    if a == 0:
        return None
    arr = [0, 1, ]
    gcd = ext_gcd(a, n, arr)
    if gcd == 1:
        return arr[0] % n
    else:
        return None


def mod_sqrt(a, p):
    """
    模素数 p 的平方根
    :return: x 使 x^2 = a (mod p)，a 为非二次剩余时返回 None
    """
    a %= p
    if a == 0:
        return 0
    if pow(a, (p - 1) // 2, p) != 1:  # Euler 判别
        return None
    if p % 4 == 3:
        return pow(a, (p + 1) // 4, p)

    # Tonelli-Shanks
    q, e = p - 1, 0
    while q % 2 == 0:
        q //= 2
        e += 1
    z = 2
    while pow(z, (p - 1) // 2, p) != p - 1:
        z += 1
    m = e
    c = pow(z, q, p)
    t = pow(a, q, p)
    x = pow(a, (q + 1) // 2, p)
    while t != 1:
        i, t2 = 0, t
        while t2 != 1:
            t2 = t2 * t2 % p
            i += 1
        b = pow(c, 1 << (m - i - 1), p)
        m = i
        c = b * b % p
        t = t * c % p
        x = x * b % p
    return x


def on_curve(p, curve):
    if p == 0:
        return True
    x, y = p
    return (y * y - (x * x * x + curve.a * x + curve.b)) % curve.p == 0


def lift_x(x, curve):
    """横坐标为 x 的曲线点 (x, y)，x 不在曲线上时返回 None"""
    P = curve.p
    if not 0 <= x < P:
        return None
    y = mod_sqrt(x * x * x + curve.a * x + curve.b, P)
    if y is None:
        return None
    return (x, y)


# 椭圆曲线加法
def EC_add(p, q, curve):
    # 0 means inf
    P = curve.p
    if p == 0 and q == 0:
        return 0  # 0 + 0 = 0
    elif p == 0:
        return q  # 0 + q = q
    elif q == 0:
        return p  # p + 0 = p
    if p[0] == q[0]:
        if (p[1] + q[1]) % P == 0:
            return 0  # mutually inverse
        return EC_double(p, curve)
    slope = (q[1] - p[1]) * inv(q[0] - p[0], P) % P  # 斜率
    x = (slope ** 2 - p[0] - q[0]) % P
    y = (slope * (p[0] - x) - p[1]) % P
    return (x, y)


def EC_inv(p, curve):
    """椭圆曲线逆元"""
    if p == 0:
        return 0
    return (p[0], (-p[1]) % curve.p)


# 椭圆曲线减法:p - q
def EC_sub(p, q, curve):
    return EC_add(p, EC_inv(q, curve), curve)


# 自加p+p
def EC_double(p, curve):
    P = curve.p
    if p == 0 or p[1] % P == 0:
        return 0
    slope = (3 * p[0] ** 2 + curve.a) * inv(2 * p[1], P) % P
    x = (slope ** 2 - 2 * p[0]) % P
    y = (slope * (p[0] - x) - p[1]) % P
    return (x, y)


# 椭圆曲线多倍点运算
def EC_multi(s, p, curve):
    """
    :param s: 倍数，按 mod n 约化
    :param p: 点
    :return: 运算结果
    """
    s %= curve.n
    n = p
    r = 0
    while s:  # 类快速幂思想
        if s & 1:
            r = EC_add(r, n, curve)
        n = EC_double(n, curve)
        s >>= 1
    return r


def base_multi(s, curve):
    """s * G"""
    return EC_multi(s, base_point(curve), curve)
