"""
connectfour - Two-player Connect Four

This package provides the board engine (grid, drops, win and tie
detection), a game controller that notifies front ends of state changes,
and a terminal interface for playing hot-seat games.
"""

__version__ = '0.1.0'
