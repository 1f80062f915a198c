"""Sigmoid nonlinearity and its derivative"""

import math


def sigmoid(x: float) -> float:
    """1 / (1 + e^-x), arranged so exp never overflows for large |x|"""
    if x >= 0:
        return 1.0 / (1.0 + math.exp(-x))
    z = math.exp(x)
    return z / (1.0 + z)


def d_sigmoid(y: float) -> float:
    """Derivative of the sigmoid written in terms of its OUTPUT y = sigmoid(x):

    d/dx sigmoid(x) = sigmoid(x) * (1 - sigmoid(x)) = y * (1 - y)
    """
    return y * (1 - y)
