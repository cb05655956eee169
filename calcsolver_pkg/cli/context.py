from dataclasses import dataclass


@dataclass
class ReplContext:
    """Holds the state of the interactive REPL session."""
    output_format: str = "human"
    pretty: bool = False
    debug_mode: bool = False
