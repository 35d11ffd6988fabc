from collections import namedtuple

from gmssl import sm3, func

Signature = namedtuple('Signature', ['r', 's'])


def marshal_sig(r, s):
    """(r, s) -> Signature；r、s 均为 None 时表示没有签名"""
    if r is None and s is None:
        return None
    return Signature(r, s)


def parse_sig(sig):
    if sig is None:
        return None, None
    return sig.r, sig.s


def _para_len(curve):
    return (curve.n.bit_length() + 7) // 8 * 2  # 十六进制字符数


def sig_to_hex(sig, curve):
    """r || s 定长十六进制串，与 gmssl 的签名格式相同"""
    width = _para_len(curve)
    return '%0*x%0*x' % (width, sig.r, width, sig.s)


def sig_from_hex(text, curve):
    width = _para_len(curve)
    if len(text) != 2 * width:
        raise ValueError('signature must be %d hex chars, got %d' % (2 * width, len(text)))
    return Signature(int(text[:width], 16), int(text[width:], 16))


def hash_to_int(digest, curve):
    """ECDSA：取摘要最左侧与 n 等长的比特"""
    order_bits = curve.n.bit_length()
    order_bytes = (order_bits + 7) // 8
    if len(digest) > order_bytes:
        digest = digest[:order_bytes]
    e = int.from_bytes(digest, 'big')
    excess = len(digest) * 8 - order_bits
    if excess > 0:
        e >>= excess
    return e


def int_to_digest(e, length=None):
    """
    整数 -> 大端字节串
    :param length: 为 None 时输出最短编码（0 对应空串），否则左侧补零到该长度
    """
    if length is None:
        length = (e.bit_length() + 7) // 8
    return e.to_bytes(length, 'big')


def sm3_digest(msg):
    if isinstance(msg, str):
        msg = bytes(msg, encoding='utf-8')
    return bytes.fromhex(sm3.sm3_hash(func.bytes_to_list(msg)))
