from .app import _health_check
from .app import main_entry
from .app import repl_loop

__all__ = ["main_entry", "repl_loop", "_health_check"]
