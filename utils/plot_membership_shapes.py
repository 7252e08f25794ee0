import os
import argparse
import logging

import numpy as np
import matplotlib.pyplot as plt

from fis.config_loader import load_system
from fis.defuzzifier import defuzzify
from fis.errors import EmptyFiringError
from fis.fuzzifier import fuzzify_variable
from fis.inference import infer_from_strengths
from fis.rule_engine import evaluate_rules
from utils.argtypes import parse_assignment

main_log = logging.getLogger("main")


def sample_variable(system, name, n=501):
    """
    Sample every labeled set of a variable over its structural domain.

    Returns:
        (xs, curves): xs is an array of n points, curves maps label -> array.
    """
    var = system.variable(name)
    lo, hi = var.bounds()
    xs = np.linspace(lo, hi, n)
    curves = {label: np.array([mf(x) for x in xs]) for label, mf in var.sets.items()}
    return xs, curves


def aggregated_curve(system, inputs, output, n=501):
    """Sample the clipped-and-aggregated output set for the given inputs."""
    lo, hi = system.variable(output).bounds()
    xs = np.linspace(lo, hi, n)
    strengths = evaluate_rules(system, inputs)
    mu = np.array([infer_from_strengths(system, strengths, output, x) for x in xs])
    return xs, mu


def plot_variable(system, name, points=None, save=False, output_dir="plots", show=True):
    """
    Plot the membership functions of one variable.
    Optionally overlay (x, degree) points as red dots.
    """
    xs, curves = sample_variable(system, name)
    fig, ax = plt.subplots(figsize=(8, 4))
    for label, ys in curves.items():
        ax.plot(xs, ys, label=label)
        ax.fill_between(xs, ys, alpha=0.1)

    if points:
        px, py = zip(*points)
        ax.scatter(
            px,
            py,
            color="red",
            s=30,
            marker="o",
            edgecolors="black",
            linewidths=0.8,
            label="input",
            zorder=10,
        )

    ax.set_title(f"Membership Functions – {name}")
    ax.set_xlabel(name)
    ax.set_ylabel("Membership Degree")
    ax.set_ylim(-0.05, 1.05)
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    _finish(fig, f"{name}_membership_functions.png", save, output_dir, show)
    return fig


def plot_aggregated_output(system, inputs, output, save=False, output_dir="plots", show=True):
    """Plot the output sets, the aggregated set and its centroid."""
    xs, curves = sample_variable(system, output)
    _, mu = aggregated_curve(system, inputs, output, n=len(xs))

    fig, ax = plt.subplots(figsize=(8, 4))
    for label, ys in curves.items():
        ax.plot(xs, ys, linestyle="--", linewidth=0.8, label=label)
    ax.fill_between(xs, mu, alpha=0.4, color="tab:orange", label="aggregated")

    try:
        crisp = defuzzify(system, inputs, output)
        ax.axvline(crisp, color="black", linewidth=1.5, label=f"centroid = {crisp:.3f}")
    except EmptyFiringError:
        ax.text(0.5, 0.5, "no rule fired", transform=ax.transAxes, ha="center")

    ax.set_title(f"Aggregated Output – {output}")
    ax.set_xlabel(output)
    ax.set_ylabel("Membership Degree")
    ax.set_ylim(-0.05, 1.05)
    ax.grid(True)
    ax.legend()
    fig.tight_layout()
    _finish(fig, f"{output}_aggregated.png", save, output_dir, show)
    return fig


def _finish(fig, filename, save, output_dir, show):
    if save:
        os.makedirs(output_dir, exist_ok=True)
        path = os.path.join(output_dir, filename)
        fig.savefig(path)
        main_log.info("Saved plot to: %s", path)
    if show:
        plt.show()


def main(argv=None):
    parser = argparse.ArgumentParser(
        description="Plot fuzzy membership function shapes."
    )
    parser.add_argument("--config", default=os.path.join("config", "tipping.toml"))
    parser.add_argument(
        "--save",
        action="store_true",
        help="Save plots as PNG files in the 'plots/' directory.",
    )
    parser.add_argument(
        "inputs", nargs="*", type=parse_assignment,
        help="name=value inputs; when given, the aggregated outputs are plotted too",
    )
    args = parser.parse_args(argv)

    system = load_system(args.config)
    inputs = dict(args.inputs)

    for name in system.variables:
        points = None
        if name in inputs:
            degrees = fuzzify_variable(system, name, inputs[name])
            points = [(inputs[name], mu) for mu in degrees.values()]
        plot_variable(system, name, points=points, save=args.save)

    if inputs:
        for output in system.output_variables():
            plot_aggregated_output(system, inputs, output, save=args.save)


if __name__ == "__main__":
    main()
