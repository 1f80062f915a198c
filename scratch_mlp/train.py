"""Train an MLP to fit y = sin(x)^2 one sample at a time and log every iteration"""

import argparse
import warnings

import pandas as pd

from scratch_mlp import errors, loss, mlp, samples
from scratch_mlp import initializer as initializers

LOG_COLUMNS = ['loss', 'x', 'y', 'y_hat']


def make_model(in_channels: int,
               out_channels: int,
               hidden_units_per_layer: int,
               hidden_layers: int,
               learning_rate: float,
               initializer: initializers.Initializer | None = None) -> mlp.MLP:
    """Build an MLP with hidden_layers hidden layers of the same width"""
    layer_widths = [in_channels] + [hidden_units_per_layer] * hidden_layers + [out_channels]
    return mlp.MLP(layer_widths, learning_rate, initializer=initializer)


def train(network: mlp.MLP,
          iterations: int = 20000,
          sampler: samples.DataIterator | None = None,
          loss: loss.Loss = loss.MSE(),
          report_every: int = 1000,
          halt_on_anomaly: bool = False) -> pd.DataFrame:
    """Run forward/backprop once per sample and record how it went

    Args:
        network (mlp.MLP): the network to train, updated in place
        iterations (int, optional): number of samples to train on. Defaults to 20000.
        sampler (samples.DataIterator | None, optional): where samples come from. Defaults to SineSquared().
        loss (loss.Loss, optional): how to score each prediction. Defaults to MSE().
        report_every (int, optional): print the running loss this often, 0 to stay quiet. Defaults to 1000.
        halt_on_anomaly (bool, optional): stop as soon as the parameters look broken. Defaults to False.

    Returns:
        pd.DataFrame: one row per iteration with columns loss, x, y, y_hat
    """
    if sampler is None:
        sampler = samples.SineSquared()

    records = []
    anomalous = False
    for i, (x, y) in enumerate(sampler(iterations), start=1):
        y_hat = network.forward(x)
        network.backprop(y)
        records.append((loss(y_hat, y), x.data[0], y.data[0], y_hat.data[0]))

        if report_every and i % report_every == 0:
            recent = [r[0] for r in records[-report_every:]]
            print(f'Iteration {i} has running loss {sum(recent) / len(recent):.6f}')

        if network.is_anomalous():
            if not anomalous:
                warnings.warn(f'NaN or abnormal parameters after iteration {i}', errors.NumericAnomaly)
            anomalous = True
            if halt_on_anomaly:
                print(f'Stopping early at iteration {i}')
                break
        else:
            anomalous = False

    return pd.DataFrame.from_records(records, columns=LOG_COLUMNS)


def write_log(frame: pd.DataFrame, path: str):
    """Write the training log as 'loss x y y_hat' lines, no header"""
    frame[LOG_COLUMNS].to_csv(path, sep=' ', header=False, index=False)


def read_log(path: str) -> pd.DataFrame:
    return pd.read_csv(path, sep=' ', header=None, names=LOG_COLUMNS)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Fit sin(x)^2 with a from-scratch MLP')
    parser.add_argument('--iterations', type=int, default=20000)
    parser.add_argument('--lr', type=float, default=0.2)
    parser.add_argument('--hidden-units', type=int, default=8)
    parser.add_argument('--hidden-layers', type=int, default=3)
    parser.add_argument('--seed', type=int, default=None)
    parser.add_argument('--report-every', type=int, default=1000)
    parser.add_argument('--output', default='data.txt', help='where to write the per-iteration log')
    parser.add_argument('--halt-on-anomaly', action='store_true')
    return parser


def main(argv: list[str] | None = None) -> pd.DataFrame:
    args = build_parser().parse_args(argv)

    initializer = initializers.Initializer(args.seed)
    network = make_model(1, 1, args.hidden_units, args.hidden_layers, args.lr, initializer=initializer)
    frame = train(network,
                  iterations=args.iterations,
                  sampler=samples.SineSquared(initializer=initializer),
                  report_every=args.report_every,
                  halt_on_anomaly=args.halt_on_anomaly)
    write_log(frame, args.output)
    print(f'Wrote {len(frame)} iterations to {args.output}')
    return frame


if __name__ == '__main__':
    main()
