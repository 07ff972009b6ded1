"""Renderers for collected dashboard data."""

from morning_dashboard.render.terminal import SECTIONS, TerminalRenderer, make_console

__all__ = ["SECTIONS", "TerminalRenderer", "make_console"]
