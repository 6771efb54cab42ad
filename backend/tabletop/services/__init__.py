"""Tabletop domain services: room registry and the session protocol.

This package holds the state-replication logic that socket handlers and
HTTP routes call into, keeping transport concerns separated from room and
entity bookkeeping.
"""

from .lobby import Lobby
from .session import TableSession

__all__ = ['Lobby', 'TableSession']
