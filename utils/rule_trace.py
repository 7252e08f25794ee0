# rule_trace.py

from typing import Any, Dict, List, Mapping

import matplotlib.pyplot as plt
import matplotlib.patches as mpatches

from fis.definition import InferenceSystem, iter_predicates
from fis.fuzzifier import fuzzify
from fis.rule_engine import evaluate_rules


def trace_rules(
    system: InferenceSystem,
    inputs: Mapping[str, float],
) -> List[Dict[str, Any]]:
    """
    Evaluate each rule and return detailed trace information per rule,
    including the membership degree of every antecedent predicate.

    Args:
        system: The inference system.
        inputs: Crisp value per input variable.

    Returns:
        A list of dictionaries, one per rule in rule-base order.
    """
    traces = []
    for i, (rule, (consequent, w)) in enumerate(
        zip(system.rules, evaluate_rules(system, inputs))
    ):
        degrees = {
            str(p): fuzzify(system, p.variable, p.label, inputs[p.variable])
            for p in iter_predicates(rule.antecedent)
        }
        traces.append(
            {
                "rule_index": i,
                "rule": str(rule),
                "output_variable": consequent.variable,
                "label": consequent.label,
                "degrees": degrees,
                "firing_strength": w,
            }
        )
    return traces


def plot_rule_contributions(trace_data, inputs, show=True):
    """Bar chart of firing strength per rule, coloured by output variable."""
    labels = [f"#{t['rule_index']} {t['output_variable']}={t['label']}" for t in trace_data]
    ws = [t["firing_strength"] for t in trace_data]

    outputs = sorted({t["output_variable"] for t in trace_data})
    palette = plt.rcParams["axes.prop_cycle"].by_key()["color"]
    color_of = {name: palette[i % len(palette)] for i, name in enumerate(outputs)}
    colors = [color_of[t["output_variable"]] for t in trace_data]

    fig, ax1 = plt.subplots(figsize=(12, 6))

    bars = ax1.bar(range(len(labels)), ws, color=colors, alpha=0.7)

    ax1.set_ylabel("Firing Strength")
    ax1.set_ylim(0.0, 1.1)
    ax1.set_xticks(range(len(labels)))
    ax1.set_xticklabels(labels, rotation=45, ha="right")
    ax1.text(
        0.01,
        0.99,
        "\n".join(f"{k} = {v:.3f}" for k, v in inputs.items()),
        transform=ax1.transAxes,
        fontsize=11,
        verticalalignment="top",
        bbox=dict(facecolor="white", alpha=0.7, edgecolor="gray"),
    )

    # Annotate W values on top of bars
    for bar in bars:
        height = bar.get_height()
        if height > 0:
            ax1.text(
                bar.get_x() + bar.get_width() / 2,
                height + 0.01,
                f"{height:.2f}",
                ha="center",
                va="bottom",
                fontsize=8,
                color="black",
            )

    handles = [mpatches.Patch(color=color_of[name], label=name) for name in outputs]
    ax1.legend(handles=handles, loc="upper right")

    ax1.set_title("Rule Contributions: Firing Strength")
    fig.tight_layout()
    if show:
        plt.show()
    return fig
