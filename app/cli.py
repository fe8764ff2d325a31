"""
Command-line interface for the DC circuit solver.

Validate and solve circuit documents and run the Kirchhoff checks
without any editor.

Usage::

    python -m cli validate circuit.json
    python -m cli solve circuit.json
    python -m cli solve circuit.json --format csv --output results.csv
    python -m cli kcl circuit.json --node 1
    python -m cli kvl circuit.json V1 R1 R2
    python -m cli equations circuit.json
    cat circuit.json | python -m cli solve -
"""

import argparse
import json
import logging
import sys
from pathlib import Path

from controllers.file_controller import validate_circuit_data
from controllers.simulation_controller import SimulationController
from models.circuit import CircuitModel
from simulation.csv_exporter import export_op_results
from simulation.dc_solver import format_equations
from simulation.format_utils import format_value
from simulation.solver_settings import load_settings
from simulation.topology import UnknownTerminalError

__version__ = "1.0.0"


def try_load_circuit(filepath: str) -> tuple[CircuitModel | None, str]:
    """Load and validate a circuit JSON file without exiting.

    Args:
        filepath: Path to the circuit JSON file, or "-" for stdin.

    Returns:
        (model, "") on success, or (None, error_message) on failure.
    """
    try:
        if filepath == "-":
            data = json.load(sys.stdin)
        else:
            path = Path(filepath)
            if not path.exists():
                return None, f"file not found: {filepath}"
            with open(path, "r") as f:
                data = json.load(f)
    except json.JSONDecodeError as e:
        return None, f"invalid JSON in {filepath}: {e}"

    try:
        validate_circuit_data(data)
        model = CircuitModel.from_dict(data)
    except ValueError as e:
        return None, f"invalid circuit file: {e}"

    return model, ""


def load_circuit(filepath: str) -> CircuitModel:
    """Load and validate a circuit JSON file.

    Raises:
        SystemExit: On file read or validation errors.
    """
    model, error = try_load_circuit(filepath)
    if model is None:
        print(f"Error: {error}", file=sys.stderr)
        sys.exit(1)
    return model


def _make_controller(args: argparse.Namespace) -> SimulationController:
    model = load_circuit(args.circuit)
    try:
        settings = load_settings(getattr(args, "settings", None))
    except (OSError, ValueError) as e:
        print(f"Error: invalid settings file: {e}", file=sys.stderr)
        sys.exit(1)
    return SimulationController(model, settings)


def _solve_or_report(sim: SimulationController):
    """Run the solve; print errors and return None on failure."""
    result = sim.run_simulation()
    if not result.success:
        print(f"Solve failed: {result.error}", file=sys.stderr)
        for err in result.errors:
            print(f"  - {err}", file=sys.stderr)
        return None
    for warning in result.warnings:
        print(f"Warning: {warning}", file=sys.stderr)
    return result


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a circuit without solving."""
    sim = _make_controller(args)
    result = sim.validate_circuit()

    if result.success:
        print(f"Circuit is valid: {args.circuit}")
        for warning in result.warnings:
            print(f"  Warning: {warning}")
        return 0

    print(f"Circuit has errors: {args.circuit}", file=sys.stderr)
    for err in result.errors:
        print(f"  - {err}", file=sys.stderr)
    return 1


def cmd_solve(args: argparse.Namespace) -> int:
    """Solve the circuit and output node voltages and currents."""
    sim = _make_controller(args)
    result = _solve_or_report(sim)
    if result is None:
        return 1

    data = result.data
    if args.format == "csv":
        output_text = export_op_results(
            data["node_voltages"],
            data["source_currents"],
            data["branch_currents"],
            Path(args.circuit).stem if args.circuit != "-" else "",
        )
    else:
        output = {"success": True, **data}
        if result.warnings:
            output["warnings"] = result.warnings
        output_text = json.dumps(output, indent=2)

    if args.output:
        Path(args.output).write_text(output_text)
        print(f"Results written to {args.output}", file=sys.stderr)
    else:
        print(output_text)
    return 0


def cmd_kcl(args: argparse.Namespace) -> int:
    """Print the KCL balance for one node or for all nodes."""
    sim = _make_controller(args)
    if _solve_or_report(sim) is None:
        return 1

    try:
        reports = [sim.kcl_report(args.node)] if args.node is not None else sim.check_all_nodes()
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    all_balanced = True
    for report in reports:
        balanced = report.balanced(sim.settings.kcl_tolerance)
        all_balanced = all_balanced and balanced
        print(f"Node {report.node_id}: sum I = {report.sum:.3e} A {'OK' if balanced else 'VIOLATED'}")
        for term in report.terms:
            print(f"  {term.component_id}[{term.terminal_index}]: {format_value(term.current, 'A')}")

    return 0 if all_balanced else 1


def cmd_kvl(args: argparse.Namespace) -> int:
    """Print the KVL balance around an ordered loop of components."""
    sim = _make_controller(args)
    if _solve_or_report(sim) is None:
        return 1

    try:
        report = sim.kvl_report(args.components)
    except UnknownTerminalError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    for drop in report.drops:
        print(f"  {drop.component_id}: {drop.drop:+.4f} V")
    print(f"Sum U = {report.sum:.4f} V")
    if report.within_tolerance:
        print("Kirchhoff's voltage law holds for this loop.")
        return 0
    print("Loop is not closed or was selected incorrectly.")
    return 1


def cmd_equations(args: argparse.Namespace) -> int:
    """Print the MNA system A x = b and its solution."""
    sim = _make_controller(args)
    result = _solve_or_report(sim)
    if result is None:
        return 1

    solve_result = result.solve_result
    for line in format_equations(solve_result):
        print(line)
    print()
    for label, value in zip(solve_result.unknown_labels, solve_result.solution):
        print(f"{label} = {value:.6g}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    """Build the CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="dc-circuit-lab",
        description="DC circuit solver: validate, solve and check Kirchhoff's laws from the command line.",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    parser.add_argument("--verbose", "-v", action="store_true", help="Enable debug logging")
    subparsers = parser.add_subparsers(dest="command", required=True)

    def add_circuit_args(sub):
        sub.add_argument("circuit", help="Path to circuit JSON file ('-' for stdin)")
        sub.add_argument("--settings", help="Path to a JSON file with solver settings")

    val_parser = subparsers.add_parser("validate", help="Check circuit for errors without solving")
    add_circuit_args(val_parser)

    solve_parser = subparsers.add_parser("solve", help="Solve the circuit and output results")
    add_circuit_args(solve_parser)
    solve_parser.add_argument("--format", choices=["json", "csv"], default="json", help="Output format (default: json)")
    solve_parser.add_argument("--output", "-o", help="Write results to file instead of stdout")

    kcl_parser = subparsers.add_parser("kcl", help="Check Kirchhoff's current law at nodes")
    add_circuit_args(kcl_parser)
    kcl_parser.add_argument("--node", type=int, help="Node id to check (default: all nodes)")

    kvl_parser = subparsers.add_parser("kvl", help="Check Kirchhoff's voltage law around a loop")
    add_circuit_args(kvl_parser)
    kvl_parser.add_argument("components", nargs="+", help="Component IDs in loop traversal order")

    eq_parser = subparsers.add_parser("equations", help="Show the MNA equations and solution")
    add_circuit_args(eq_parser)

    return parser


def main(argv=None) -> int:
    """CLI entry point. Returns exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    handlers = {
        "validate": cmd_validate,
        "solve": cmd_solve,
        "kcl": cmd_kcl,
        "kvl": cmd_kvl,
        "equations": cmd_equations,
    }

    handler = handlers.get(args.command)
    if handler is None:
        parser.print_help()
        return 1

    return handler(args)


if __name__ == "__main__":
    sys.exit(main())
