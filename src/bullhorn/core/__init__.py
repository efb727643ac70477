"""Core services: event classification, routing, zap aggregation, live event reminders.

Import submodules directly (``bullhorn.core.service`` etc.); this package
re-exports nothing so that ``bullhorn.notify`` can depend on
``bullhorn.core.keys`` without an import cycle.
"""
