"""A multilayer perceptron: a stack of fully connected sigmoid layers trained one sample
at a time by backpropagation.

Layer i computes a[i+1] = sigmoid(W[i] @ a[i] + b[i]). The activations from the latest
forward pass are cached so the following backprop can reuse them.
"""

from typing import Sequence

from scratch_mlp import activation, errors, matrix
from scratch_mlp import initializer as initializers


class MLP():
    def __init__(self,
                 layer_widths: Sequence[int],
                 learning_rate: float = 0.001,
                 initializer: initializers.Initializer | None = None,
                 clip_gradients: bool = False):
        """Create a new network with randomly initialized weights and biases

        Args:
            layer_widths (Sequence[int]): units per layer, input first and output last
            learning_rate (float, optional): step size applied to every gradient. Defaults to 0.001.
            initializer (Initializer | None, optional): random source for the parameters. Defaults to the shared one.
            clip_gradients (bool, optional): zero out tiny gradient entries before each update. Defaults to False.
        """
        layer_widths = list(layer_widths)
        if len(layer_widths) < 2:
            raise errors.InvalidShape(f'Need at least an input and an output width, got {layer_widths}')
        if any(w < 1 for w in layer_widths):
            raise errors.InvalidShape(f'Every layer needs at least one unit, got {layer_widths}')
        if learning_rate <= 0:
            raise errors.InvalidShape(f'Learning rate must be positive, got {learning_rate}')

        self.layer_widths = layer_widths
        self.learning_rate = learning_rate
        self.clip_gradients = clip_gradients
        init = initializer if initializer is not None else initializers.default_initializer

        self.weights: list[matrix.DenseMatrix] = []
        self.biases: list[matrix.DenseMatrix] = []
        for in_channels, out_channels in zip(layer_widths[:-1], layer_widths[1:]):
            self.weights.append(init.normal(out_channels, in_channels))
            self.biases.append(init.normal(out_channels, 1))

        self.activations: list[matrix.DenseMatrix | None] = [None] * len(layer_widths)
        self._pending_backprop = False  # True between a forward and the backprop that consumes it

    @property
    def num_layers(self) -> int:
        return len(self.weights)

    def _check_column(self, m: matrix.DenseMatrix, rows: int, what: str):
        if m.shape != (rows, 1):
            raise errors.DimensionMismatch(f'Expected {what} of shape ({rows}, 1), got {m.shape}')

    def forward(self, x: matrix.DenseMatrix) -> matrix.DenseMatrix:
        """Forward pass through the whole network, caching every layer's output"""
        self._check_column(x, self.layer_widths[0], 'input')

        self.activations[0] = x.copy()  # the caller keeps its own input
        for i in range(self.num_layers):
            y = self.weights[i].matmul(self.activations[i])
            y = y.add(self.biases[i])
            self.activations[i + 1] = y.apply_function(activation.sigmoid)

        self._pending_backprop = True
        return self.activations[-1].copy()

    def __call__(self, x: matrix.DenseMatrix) -> matrix.DenseMatrix:
        return self.forward(x)

    def backprop(self, target: matrix.DenseMatrix):
        """Update every weight and bias from the error against target.

        Uses the activations cached by the last forward call, so each forward can be
        followed by exactly one backprop.

        error = target - prediction, and for each layer from last to first:
            prev_error = W.T @ error          (before the sigmoid derivative is applied)
            grad = lr * error * a_out * (1 - a_out)
            b += grad
            W += grad @ a_in.T
            error = prev_error
        """
        if not self._pending_backprop:
            raise errors.StaleActivations('backprop needs a forward pass first (and only one backprop per forward)')
        self._check_column(target, self.layer_widths[-1], 'target')

        error = target.sub(self.activations[-1])

        for i in reversed(range(self.num_layers)):
            prev_error = self.weights[i].transpose().matmul(error)
            d_outputs = self.activations[i + 1].apply_function(activation.d_sigmoid)
            gradients = error.multiply_elementwise(d_outputs)
            if self.clip_gradients:
                gradients = gradients.clip()
            gradients = gradients.multiply_scalar(self.learning_rate)
            weight_gradients = gradients.matmul(self.activations[i].transpose())

            self.biases[i] = self.biases[i].add(gradients)
            self.weights[i] = self.weights[i].add(weight_gradients)
            error = prev_error

        self._pending_backprop = False

    def is_anomalous(self) -> bool:
        """Poll every weight and bias for NaN or abnormal values"""
        return any(p.is_nan() or p.is_abnormal() for p in self.weights + self.biases)


# alias
Network = MLP
