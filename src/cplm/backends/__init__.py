"""Backends for CPLM output rendering (C-style predicate text)."""

from .text_renderer import describe_table, render_assignment, render_expression, render_preamble

__all__ = ["describe_table", "render_assignment", "render_expression", "render_preamble"]
