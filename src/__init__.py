"""EvalMatch - scoring toolkit for LLM task outputs."""

__version__ = "0.1.0"
