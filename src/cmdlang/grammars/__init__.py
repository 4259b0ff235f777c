"""Grammar tables shipped with cmdlang and the YAML grammar loader."""

from .loader import grammar_from_mapping, load_grammar
from .window import window_manager_grammar

__all__ = ["grammar_from_mapping", "load_grammar", "window_manager_grammar"]
