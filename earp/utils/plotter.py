import matplotlib.pyplot as plt
import numpy as np


class Plotter:
    METRICS = (('hit_rate', 'Hit Rate'),
               ('writebacks', 'PCM Write-backs'),
               ('energy_consumed', 'Energy Units'))

    def plot_comparison(self, results, title="Replacement Policy Comparison",
                        save_path=None, show=True):
        """Bar-plot hit rate, write-backs and energy for each policy.

        results: dict mapping policy label -> metrics dict from get_metrics()
        """
        if not results:
            raise ValueError("No results to plot")
        labels = list(results.keys())
        x = np.arange(len(labels))

        fig, axes = plt.subplots(1, len(self.METRICS), figsize=(15, 5))
        for ax, (key, ylabel) in zip(axes, self.METRICS):
            values = [results[label][key] for label in labels]
            ax.bar(x, values, color='tab:blue', alpha=0.8)
            ax.set_xticks(x)
            ax.set_xticklabels(labels)
            ax.set_ylabel(ylabel)
            ax.grid(True, axis='y', alpha=0.3)

        fig.suptitle(title)
        fig.tight_layout()

        if save_path:
            fig.savefig(save_path)
        if show:
            plt.show()
        else:
            plt.close(fig)
        return fig
