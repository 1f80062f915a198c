"""Everything that can go wrong inside the engine, in one place."""


class DimensionMismatch(ValueError):
    """Operand shapes break an operation's precondition (a programmer error)"""


class InvalidShape(ValueError):
    """A matrix or network was asked to take a shape that makes no sense"""


class StaleActivations(RuntimeError):
    """backprop was called without a fresh forward pass to consume"""


class NumericAnomaly(RuntimeWarning):
    """NaN or abnormal values showed up in the parameters.

    Only a warning: the engine never raises this, the training loop decides what to do.
    """
