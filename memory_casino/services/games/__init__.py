"""Game domain services: deck, session state machine, achievements, timers.

This package contains pure(ish) domain logic that is imported by HTTP
routes and the background sweeper, keeping transport concerns separated
from core game mechanics.
"""
