"""
PORTS - Interfaces that infrastructure implements

A "port" is an abstract interface that defines WHAT the domain needs,
without specifying HOW it's done.

Subfolders:
- repositories/  → Data persistence interfaces
- realtime.py    → Live channel and room broadcast interfaces
"""

from marketplace.domain.ports.realtime import Channel, RoomBroadcaster

__all__ = [
    "Channel",
    "RoomBroadcaster",
]
