import sys

import matplotlib.pyplot as plt

from scratch_mlp.train import read_log

# Plot the running loss and the final fit from a training log

def plot_losses(path: str, window: int = 100):
    """Rolling mean loss on the left, predictions vs labels on the right"""
    data = read_log(path)

    fig, (ax_loss, ax_fit) = plt.subplots(1, 2, figsize=(12, 5))

    ax_loss.plot(data['loss'].rolling(window).mean())
    ax_loss.set_yscale('log')
    ax_loss.set_xlabel('iteration')
    ax_loss.set_ylabel(f'squared error ({window} step mean)')

    last = data.tail(1000)  # only the end of training
    ax_fit.scatter(last['x'], last['y'], s=4, label='sin(x)^2')
    ax_fit.scatter(last['x'], last['y_hat'], s=4, label='prediction')
    ax_fit.legend()

    plt.show()

if __name__ == '__main__':
    plot_losses(sys.argv[1] if len(sys.argv) > 1 else 'data.txt')
