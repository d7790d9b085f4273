"""Text explanation and command-line front end for Guna Milan reports."""

from .explain import explain_report

__all__ = ["explain_report"]
