"""Interpretation layer for applying score interpretation bands."""

from neuroscale.interpretation.interpreter import Interpreter

__all__ = [
    "Interpreter",
]
