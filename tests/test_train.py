# tests/test_train.py
import math
import warnings

import pytest

from scratch_mlp import loss, samples, train
from scratch_mlp.errors import NumericAnomaly
from scratch_mlp.initializer import Initializer
from scratch_mlp.matrix import DenseMatrix


def test_make_model_widths(initializer) -> None:
    net = train.make_model(1, 1, 8, 3, 0.2, initializer=initializer)
    assert net.layer_widths == [1, 8, 8, 8, 1]
    assert net.learning_rate == 0.2


def test_mse_loss() -> None:
    pred = DenseMatrix(2, 1, [0.5, 1.0])
    labels = DenseMatrix(2, 1, [1.0, 1.0])
    assert loss.MSE()(pred, labels) == pytest.approx(0.125)


def test_sine_squared_samples(initializer) -> None:
    pairs = list(samples.SineSquared(initializer=initializer)(50))
    assert len(pairs) == 50
    for x, y in pairs:
        assert x.shape == y.shape == (1, 1)
        assert 0.0 <= x.data[0] < math.pi
        assert y.data[0] == pytest.approx(math.sin(x.data[0]) ** 2)


def test_train_records_every_iteration(initializer, capsys) -> None:
    net = train.make_model(1, 1, 4, 1, 0.2, initializer=initializer)
    frame = train.train(net, iterations=30, sampler=samples.SineSquared(initializer=initializer), report_every=10)
    assert list(frame.columns) == ['loss', 'x', 'y', 'y_hat']
    assert len(frame) == 30
    assert frame['loss'].tolist() == pytest.approx(((frame['y'] - frame['y_hat']) ** 2).tolist())
    assert capsys.readouterr().out.count('running loss') == 3


def test_write_log_format(initializer, tmp_path) -> None:
    net = train.make_model(1, 1, 4, 1, 0.2, initializer=initializer)
    frame = train.train(net, iterations=5, sampler=samples.SineSquared(initializer=initializer), report_every=0)
    path = tmp_path / 'data.txt'
    train.write_log(frame, path)

    lines = path.read_text().splitlines()
    assert len(lines) == 5
    assert all(len(line.split(' ')) == 4 for line in lines)
    assert train.read_log(path)['y_hat'].tolist() == pytest.approx(frame['y_hat'].tolist())


def test_anomaly_warns_and_can_halt(initializer) -> None:
    net = train.make_model(1, 1, 2, 1, 0.2, initializer=initializer)
    net.weights[0].fill(5.0)  # way past the abnormal limit

    with pytest.warns(NumericAnomaly):
        frame = train.train(net, iterations=50, sampler=samples.SineSquared(initializer=initializer),
                            report_every=0, halt_on_anomaly=True)
    assert len(frame) == 1


def test_anomaly_does_not_stop_by_default(initializer) -> None:
    net = train.make_model(1, 1, 2, 1, 0.2, initializer=initializer)
    net.weights[0].fill(5.0)
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', NumericAnomaly)
        frame = train.train(net, iterations=20, sampler=samples.SineSquared(initializer=initializer), report_every=0)
    assert len(frame) == 20


def test_main_writes_log(tmp_path, capsys) -> None:
    out = tmp_path / 'run.txt'
    frame = train.main(['--iterations', '40', '--seed', '3', '--report-every', '20', '--output', str(out)])
    assert len(frame) == 40
    assert len(out.read_text().splitlines()) == 40
    assert 'Wrote 40 iterations' in capsys.readouterr().out


@pytest.mark.slow
def test_sine_squared_converges() -> None:
    init = Initializer(seed=2024)
    net = train.make_model(1, 1, 8, 3, 0.2, initializer=init)
    frame = train.train(net, iterations=20000, sampler=samples.SineSquared(initializer=init), report_every=0)

    early = frame['loss'].head(100).mean()
    late = frame['loss'].tail(100).mean()
    assert late < early / 10
