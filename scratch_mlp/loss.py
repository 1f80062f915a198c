"""Loss functions measure how far predictions are from labels. Here they are only used
to watch training; the network computes its own error inside backprop."""

from scratch_mlp import matrix


class Loss():
    def loss(self, predictions: matrix.DenseMatrix, labels: matrix.DenseMatrix) -> float:
        """From predictions and labels, figure out how wrong we are

        Returns:
            float: wrongness
        """
        raise NotImplementedError

    def __call__(self, predictions: matrix.DenseMatrix, labels: matrix.DenseMatrix) -> float:
        return self.loss(predictions, labels)


class MSE(Loss):
    def loss(self, predictions: matrix.DenseMatrix, labels: matrix.DenseMatrix) -> float:
        diff = labels.sub(predictions).square()
        return sum(diff.data) / diff.numel  # single val
