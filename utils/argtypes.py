import argparse


def parse_assignment(s: str):
    """'service=2.5' -> ('service', 2.5)."""
    if "=" not in s:
        raise argparse.ArgumentTypeError(f"Invalid input '{s}' (expected 'name=value').")
    name, value = (t.strip() for t in s.split("=", 1))
    if not name:
        raise argparse.ArgumentTypeError(f"Empty variable name in '{s}'.")
    try:
        return name, float(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Value for '{name}' is not a number: '{value}'.")
