"""
connectfour.interfaces - Front ends for Connect Four

Renderers and input loops that drive the engine through ConnectFourGame.
"""

# Don't import anything here to avoid circular imports
__all__ = []
