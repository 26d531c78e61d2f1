"""
Hydration Tracker - Source Package

A personal daily-intake tracker that records what you drink
and keeps per-day totals you can trust.

DESIGN PRINCIPLES:
1. Every change to a day is an event, and the event log is the truth
2. Totals never go negative
3. Undo is the exact inverse of the last event
4. Old saved data is migrated, never discarded
5. Storage layer is swappable
"""

__version__ = "1.0.0"
__author__ = "Hydration Tracker Team"
