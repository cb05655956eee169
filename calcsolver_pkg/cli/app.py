"""Command-line entry point: argument parsing and the run mode it selects."""

from __future__ import annotations

import argparse
import sys

from ..config import LOG_LEVEL
from ..config import SIMPLIFY_ENABLED
from ..config import VERSION
from ..logging_config import get_logger
from ..logging_config import setup_logging
from ..utils.formatting import format_superscript
from ..utils.formatting import print_result

logger = get_logger("cli")


def _health_check() -> int:
    """Run health check to verify dependencies and basic operations.

    Returns:
        Exit code (0 for success, non-zero for failures)
    """
    checks_passed = 0
    checks_failed = 0

    print("Running calcsolver health check...")
    print("-" * 50)

    # Check SymPy import
    try:
        import sympy as sp

        print(f"[OK] SymPy {sp.__version__} imported successfully")
        checks_passed += 1
    except ImportError as e:
        print(f"[FAIL] SymPy import failed: {e}")
        checks_failed += 1

    # Check capabilities
    try:
        from ..capabilities import sympy_capabilities

        available = sympy_capabilities().available()
        for name, present in available.items():
            if present:
                print(f"[OK] {name} capability available")
                checks_passed += 1
            elif name == "simplify":
                print("[WARN] simplify capability disabled (results shown unsimplified)")
            else:
                print(f"[FAIL] {name} capability missing")
                checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Capability check failed: {e}")
        checks_failed += 1

    # Check integration end to end
    try:
        from ..dispatch import solve

        result = solve("∫ x^2 dx")
        if result.ok and result.text == "x ^ 3 / 3":
            print("[OK] Integration works")
            checks_passed += 1
        else:
            print(f"[FAIL] Integration check failed: {result.text}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Integration check failed: {e}")
        checks_failed += 1

    # Check differentiation end to end
    try:
        from ..dispatch import solve

        result = solve("d/dx x^2")
        if result.ok and result.text == "2 * x":
            print("[OK] Differentiation works")
            checks_passed += 1
        else:
            print(f"[FAIL] Differentiation check failed: {result.text}")
            checks_failed += 1
    except Exception as e:
        print(f"[FAIL] Differentiation check failed: {e}")
        checks_failed += 1

    # Check numeric verification (NumPy)
    try:
        import numpy

        from ..integration import integrate
        from ..parser import parse_expression
        from ..utils.numeric import check_antiderivative

        body = parse_expression("3*x^2")
        if check_antiderivative(body, integrate(body, "x"), "x"):
            print(f"[OK] NumPy {numpy.__version__} numeric check works")
            checks_passed += 1
        else:
            print("[FAIL] Numeric check rejected 3*x^2 -> x^3")
            checks_failed += 1
    except ImportError:
        print("[WARN] NumPy not available (numeric checks and plots disabled)")
        print("  To install: pip install numpy")

    print("-" * 50)
    print(f"Results: {checks_passed} passed, {checks_failed} failed")

    if checks_failed > 0:
        print("\n[WARN] Some health checks failed. Core functionality may be impaired.")
        return 1

    print("\n[OK] All health checks passed!")
    return 0


def repl_loop(output_format: str = "human", solver=None) -> None:
    """Start the interactive REPL."""
    from .context import ReplContext
    from .repl_core import REPL

    # Keep ∫ printable on Windows consoles
    if sys.platform == "win32":
        try:
            sys.stdin.reconfigure(encoding="utf-8")
            sys.stdout.reconfigure(encoding="utf-8")
        except AttributeError:
            pass

    REPL(solver=solver, context=ReplContext(output_format=output_format)).start()


def main_entry(argv: list[str] | None = None) -> int:
    """
    Main entry point for the calcsolver CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    parser = argparse.ArgumentParser(
        prog="calcsolver",
        description="Solve '∫ <expr> d<var>' integrals and 'd/d<var> <expr>' derivatives.",
    )
    parser.add_argument(
        "-e",
        "--eval",
        type=str,
        help="Solve one request and exit (non-interactive)",
        dest="eval_expr",
    )
    parser.add_argument(
        "--format",
        type=str,
        choices=["json", "human"],
        default="human",
        help="Output format: json (machine-readable) or human (human-readable)",
    )
    parser.add_argument(
        "--pretty",
        action="store_true",
        help="Render integer exponents as superscripts (human format only)",
    )
    parser.add_argument(
        "--no-simplify",
        action="store_true",
        help="Show results without running the simplifier",
    )
    parser.add_argument(
        "-v", "--version", action="store_true", help="Show program version"
    )
    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set logging level (default: CALCSOLVER_LOG_LEVEL or WARNING)",
    )
    parser.add_argument("--log-file", type=str, help="Write logs to file")
    parser.add_argument(
        "--health-check",
        action="store_true",
        help="Run health check and verify dependencies",
    )
    args = parser.parse_args(argv)

    setup_logging(level=args.log_level or LOG_LEVEL, log_file=args.log_file)

    if args.version:
        print(VERSION)
        return 0
    if args.health_check:
        return _health_check()

    from ..capabilities import sympy_capabilities
    from ..dispatch import Solver

    # --no-simplify overrides CALCSOLVER_SIMPLIFY_ENABLED
    simplify_enabled = SIMPLIFY_ENABLED and not args.no_simplify
    solver = Solver(sympy_capabilities(simplify_enabled=simplify_enabled))

    if args.eval_expr is not None:
        logger.debug("Solving %r from the command line", args.eval_expr)
        result = solver.solve(args.eval_expr)
        if result.ok and args.pretty and args.format == "human":
            print(format_superscript(result.text))
        else:
            print_result(result, args.format)
        return 0 if result.ok else 1

    repl_loop(output_format=args.format, solver=solver)
    return 0
