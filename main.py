"""
Command-line entry point for evaluating a fuzzy inference system.

Loads a TOML definition, evaluates it for the crisp inputs given on the
command line and prints the defuzzified output. Optionally traces rule firing
strengths and plots the aggregated output set.

Example:
    python main.py --config config/tipping.toml service=2 food=5
"""

import argparse
import logging
import os
import sys

from fis.config_loader import load_config
from fis.controller import FISController
from fis.errors import EmptyFiringError, NotFoundError
from utils.argtypes import parse_assignment
from utils.logger import setup_logging
from utils.profiler import CodeProfiler

DEFAULT_CONFIG = os.path.join(os.path.dirname(__file__), "config", "tipping.toml")


def build_parser():
    ap = argparse.ArgumentParser(
        prog="mamdani",
        description="Evaluate a Mamdani fuzzy inference system.",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter,
    )
    ap.add_argument("--config", default=DEFAULT_CONFIG, help="TOML definition file")
    ap.add_argument("--output", help="output variable (default: from config)")
    ap.add_argument("--log-dir", default="logs")
    ap.add_argument("--trace", action="store_true", help="plot rule firing strengths")
    ap.add_argument("--plot", action="store_true", help="plot the aggregated output set")
    ap.add_argument("inputs", nargs="+", type=parse_assignment, help="name=value pairs")
    return ap


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    setup_logging(log_dir=args.log_dir)
    main_log = logging.getLogger("main")

    try:
        cfg = load_config(args.config)
        main_log.info("Configuration file '%s' loaded.", args.config)
        controller = FISController.from_config(cfg)
        inputs = dict(args.inputs)
        output = args.output or controller.output

        with CodeProfiler(f"compute {output}"):
            result = controller.compute(inputs, output)
    except (OSError, ValueError, NotFoundError) as e:
        main_log.error("Invalid definition or inputs: %s", e)
        return 2
    except EmptyFiringError as e:
        main_log.error("%s", e)
        return 1

    print(f"{output} = {result:.4f}")

    if args.trace:
        from utils.rule_trace import trace_rules, plot_rule_contributions
        traces = trace_rules(controller.system, inputs)
        for t in traces:
            main_log.info("Rule# %d W= %.3f | %s", t["rule_index"], t["firing_strength"], t["rule"])
        plot_rule_contributions(traces, inputs)

    if args.plot:
        from utils.plot_membership_shapes import plot_aggregated_output
        plot_aggregated_output(controller.system, inputs, output)

    return 0


if __name__ == "__main__":
    sys.exit(main())
