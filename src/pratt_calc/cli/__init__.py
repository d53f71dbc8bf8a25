"""
Pratt Calculator Command-Line Interface
=======================================

This package provides the pcalc command-line tool, a Click-based
front end to parse_expression() and evaluate().
"""

__all__ = ["pcalc"]
