"""
Console module for the RouteLens dashboard.
Holds per-view session state and the HTTP surface used by the renderer.
"""

from console.session import ConsoleSession, RequestToken

__all__ = [
    'ConsoleSession',
    'RequestToken',
]
