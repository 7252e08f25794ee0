# test/test_plot_membership_shapes.py
import matplotlib.pyplot as plt
import numpy as np
import pytest

from fis.inference import infer
from utils import plot_membership_shapes
from utils.plot_membership_shapes import (
    aggregated_curve,
    plot_aggregated_output,
    plot_variable,
    sample_variable,
)


def test_sample_variable_spans_bounds(tipping_system):
    xs, curves = sample_variable(tipping_system, "tip", n=301)
    assert xs[0] == 0.0 and xs[-1] == 30.0
    assert set(curves) == {"cheap", "average", "generous"}
    assert np.all((curves["cheap"] >= 0.0) & (curves["cheap"] <= 1.0))
    assert curves["average"].max() == pytest.approx(1.0)


def test_aggregated_curve_matches_infer(tipping_system, tipping_inputs):
    xs, mu = aggregated_curve(tipping_system, tipping_inputs, "tip", n=31)
    expected = [infer(tipping_system, tipping_inputs, "tip", x) for x in xs]
    assert np.allclose(mu, expected)
    assert mu.max() == 0.6


def test_plots_do_not_crash(tipping_system, tipping_inputs, tmp_path):
    fig = plot_variable(tipping_system, "service", points=[(2.0, 0.6)], show=False)
    plt.close(fig)
    fig = plot_aggregated_output(
        tipping_system, tipping_inputs, "tip", save=True, output_dir=str(tmp_path), show=False
    )
    plt.close(fig)
    assert (tmp_path / "tip_aggregated.png").exists()


def test_plot_empty_firing_does_not_crash(tipping_system):
    fig = plot_aggregated_output(
        tipping_system, {"service": -100.0, "food": 50.0}, "tip", show=False
    )
    plt.close(fig)


def test_main_saves_every_variable(tipping_toml, tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(plot_membership_shapes.plt, "show", lambda: None)
    plot_membership_shapes.main(["--config", tipping_toml, "--save", "service=2", "food=5"])
    plt.close("all")
    saved = sorted(p.name for p in (tmp_path / "plots").iterdir())
    assert saved == [
        "food_membership_functions.png",
        "service_membership_functions.png",
        "tip_aggregated.png",
        "tip_membership_functions.png",
    ]


def test_main_marks_input_degrees(tipping_toml, monkeypatch):
    marked = {}

    def fake_plot_variable(system, name, points=None, save=False):
        marked[name] = points

    monkeypatch.setattr(plot_membership_shapes, "plot_variable", fake_plot_variable)
    monkeypatch.setattr(plot_membership_shapes, "plot_aggregated_output", lambda *a, **k: None)
    plot_membership_shapes.main(["--config", tipping_toml, "service=2"])

    assert marked["tip"] is None and marked["food"] is None
    assert marked["service"] == [(2.0, pytest.approx(0.6)), (2.0, pytest.approx(0.4)), (2.0, 0.0)]
