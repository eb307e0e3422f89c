"""
Web dashboard module for gantt-timeline.

PURPOSE: FastAPI-based web UI with htmx for dynamic updates.
AI CONTEXT: Optional module - requires 'web' extras to be installed.

FEATURES:
- Dashboard with style, color mode and sort switches
- Server-side chart rendering (matplotlib)
- JSON API exposing the data view and the visual model
- Ad-hoc encoding of posted records

USAGE:
    # Via CLI
    gantt-timeline dashboard

    # Programmatically
    from gantt_timeline.web import create_app
    app = create_app()
"""

from .app import create_app, run_dashboard

__all__ = ["create_app", "run_dashboard"]
