#!/usr/bin/env python3
"""
Calcsolver: power-rule integrals and symbolic derivatives

Main entry point for the calcsolver application.
This file is a thin wrapper that delegates all functionality
to the calcsolver_pkg package.

Usage:
    python calcsolver.py                        # Interactive REPL
    python calcsolver.py -e "∫ x^2 dx"          # Solve one request
    python calcsolver.py -e "d/dx x^3" --format json
    python calcsolver.py --help                 # Show help

Terminal command for Streamlit:
    streamlit run streamlit_app.py
"""

from __future__ import annotations

import sys


def main() -> int:
    """
    Main entry point for calcsolver.

    Returns:
        Exit code (0 for success, non-zero for errors).
    """
    try:
        from calcsolver_pkg.cli import main_entry

        return main_entry(sys.argv[1:])
    except KeyboardInterrupt:
        print("\nInterrupted by user.")
        return 1
    except ImportError as e:
        print(f"Error: Failed to import calcsolver_pkg: {e}")
        print("Please ensure all dependencies are installed: pip install -e .")
        return 1


if __name__ == "__main__":
    sys.exit(main())
