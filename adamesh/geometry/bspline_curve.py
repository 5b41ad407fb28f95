import numpy as np


def find_span(knot, p, xi):
    """
    @brief 找到参数 xi 所在的结点区间 [knot[k], knot[k+1])

    The last parameter value belongs to the last non-degenerate span.
    """
    n = len(knot) - p - 1
    if xi >= knot[n]:
        return n - 1
    return int(np.searchsorted(knot, xi, side='right')) - 1


def basis(knot, p, xi):
    """
    @brief 计算 xi 处所有 p 次 B 样条基函数的值

    @param[in] knot 结向量, 长度 m + 1
    @param[in] p 样条基函数的次数
    @param[in] xi 参数点, 标量或一维数组

    @return 形状为 (len(xi), m - p) 的数组
    """
    knot = np.asarray(knot, dtype=np.float64)
    xi = np.atleast_1d(np.asarray(xi, dtype=np.float64))
    m = len(knot) - 1

    N = ((knot[:-1] <= xi[:, None]) & (xi[:, None] < knot[1:])).astype(np.float64)
    last, = np.nonzero(knot[:-1] < knot[1:])
    N[xi >= knot[-1], last[-1]] = 1.0

    for k in range(1, p + 1):
        d0 = knot[k:m] - knot[:m-k]
        d1 = knot[k+1:m+1] - knot[1:m-k+1]
        with np.errstate(divide='ignore', invalid='ignore'):
            a = np.where(d0 > 0, (xi[:, None] - knot[:m-k])/d0, 0.0)
            b = np.where(d1 > 0, (knot[k+1:m+1] - xi[:, None])/d1, 0.0)
        N = a*N[:, :-1] + b*N[:, 1:]
    return N


def grad_basis(knot, p, xi):
    """
    @brief 计算 xi 处所有 p 次 B 样条基函数的一阶导数
    """
    knot = np.asarray(knot, dtype=np.float64)
    n = len(knot) - p - 1
    if p == 0:
        return np.zeros((len(np.atleast_1d(xi)), n), dtype=np.float64)
    N = basis(knot, p - 1, xi)
    d0 = knot[p:p+n] - knot[:n]
    d1 = knot[p+1:p+1+n] - knot[1:n+1]
    with np.errstate(divide='ignore', invalid='ignore'):
        a = np.where(d0 > 0, p/d0, 0.0)
        b = np.where(d1 > 0, p/d1, 0.0)
    return a*N[:, :-1] - b*N[:, 1:]


def insert_knot(pw, knot, p, u):
    """
    @brief Boehm 插入算法, 在 u 处插入一个结点

    @param[in] pw 齐次坐标控制点 (w*x, w*y, w), 形状 (n, 3)
    @param[in] knot 结向量, 长度 n + p + 1
    @param[in] p 次数
    @param[in] u 插入的参数值

    @return (新的控制点, 新的结向量)
    """
    n = len(pw)
    k = find_span(knot, p, u)
    qw = np.zeros((n + 1, pw.shape[1]), dtype=pw.dtype)
    qw[:k-p+1] = pw[:k-p+1]
    qw[k+1:] = pw[k:]
    for i in range(k - p + 1, k + 1):
        alpha = (u - knot[i])/(knot[i+p] - knot[i])
        qw[i] = (1 - alpha)*pw[i-1] + alpha*pw[i]
    return qw, np.insert(knot, k + 1, u)


def split(pw, knot, p, u):
    """
    @brief 在 u 处把 B 样条曲线分成两段, 每段重新参数化到 [0, 1]

    The knot u is inserted until its multiplicity is p + 1, after which the
    control polygon separates into two independent clamped curves.
    """
    s = int(np.sum(np.isclose(knot, u)))
    for _ in range(p + 1 - s):
        pw, knot = insert_knot(pw, knot, p, u)
    r = int(np.nonzero(np.isclose(knot, u))[0][0])

    k0 = knot[:r+p+1]
    k1 = knot[r:]
    k0 = (k0 - k0[0])/(k0[-1] - k0[0])
    k1 = (k1 - k1[0])/(k1[-1] - k1[0])
    return (pw[:r], k0), (pw[r:], k1)


def gauss_points(knot, nq=12):
    """
    @brief 在每个非退化结点区间上生成 Gauss-Legendre 积分点和权重
    """
    x, w = np.polynomial.legendre.leggauss(nq)
    knot = np.unique(np.asarray(knot, dtype=np.float64))
    a = knot[:-1, None]
    h = (knot[1:] - knot[:-1])[:, None]
    xi = (a + 0.5*h*(x + 1)).reshape(-1)
    ws = (0.5*h*w).reshape(-1)
    return xi, ws
