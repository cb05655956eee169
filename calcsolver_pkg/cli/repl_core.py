import logging
from typing import Optional

from ..config import VERSION
from ..dispatch import Solver
from ..logging_config import ROOT_LOGGER_NAME
from ..logging_config import get_logger
from ..utils.formatting import format_superscript
from ..utils.formatting import print_result
from .context import ReplContext

logger = get_logger("repl")

HELP_TEXT = """COMMANDS
  help            Show commands
  quit, exit      Exit
  pretty [on|off] Superscript exponents in results
  json [on|off]   Print results as JSON
  debug [on|off]  Debug logging

CALCULUS
  ∫ x^2 dx        Integrate (power rule: x, x^n, c*x, c*x^n)
  d/dx x^2        Differentiate
"""


class REPL:
    """Read-eval-print loop around a single Solver."""

    def __init__(self, solver: Optional[Solver] = None, context: Optional[ReplContext] = None):
        self.solver = solver if solver is not None else Solver()
        self.ctx = context if context else ReplContext()
        self.running = True
        # Level to restore when debug mode is switched off
        self._saved_log_level: Optional[int] = None
        self._setup_readline()

    def _setup_readline(self):
        try:
            import readline  # noqa: F401
        except ImportError:
            pass

    def start(self):
        """Main loop entry point."""
        print(f"calcsolver v{VERSION}. Type 'help' for commands, 'quit' to exit.")
        while self.running:
            self.loop_once()

    def loop_once(self):
        """Single iteration of the read-eval-print loop."""
        prompt = ">>> " if not self.ctx.debug_mode else "DEBUG>>> "
        try:
            raw = input(prompt)
        except (EOFError, KeyboardInterrupt):
            print()
            self.running = False
            return
        self.handle_line(raw)

    def _toggle(self, arg: str, current: bool) -> bool:
        if arg == "on":
            return True
        if arg == "off":
            return False
        return not current

    def handle_line(self, raw: str) -> None:
        line = raw.strip()
        if not line:
            return
        command, _, arg = line.partition(" ")
        command = command.lower()
        arg = arg.strip().lower()

        if command in ("quit", "exit"):
            self.running = False
        elif command == "help":
            print(HELP_TEXT)
        elif command == "pretty":
            self.ctx.pretty = self._toggle(arg, self.ctx.pretty)
            print(f"Pretty output {'on' if self.ctx.pretty else 'off'}")
        elif command == "json":
            use_json = self._toggle(arg, self.ctx.output_format == "json")
            self.ctx.output_format = "json" if use_json else "human"
            print(f"JSON output {'on' if use_json else 'off'}")
        elif command == "debug":
            self._set_debug(self._toggle(arg, self.ctx.debug_mode))
            print(f"Debug mode {'on' if self.ctx.debug_mode else 'off'}")
        else:
            self.evaluate(line)

    def _set_debug(self, enabled: bool) -> None:
        root = logging.getLogger(ROOT_LOGGER_NAME)
        if enabled and not self.ctx.debug_mode:
            self._saved_log_level = root.level
            root.setLevel(logging.DEBUG)
            logger.debug("Debug logging enabled")
        elif not enabled and self.ctx.debug_mode:
            saved = self._saved_log_level
            root.setLevel(logging.WARNING if saved is None else saved)
            self._saved_log_level = None
        self.ctx.debug_mode = enabled

    def evaluate(self, line: str) -> None:
        result = self.solver.solve(line)
        if result.ok and self.ctx.pretty and self.ctx.output_format == "human":
            print(format_superscript(result.text))
            return
        print_result(result, self.ctx.output_format)
