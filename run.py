#!/usr/bin/env python3
"""
GHOST_GRID Launcher
====================
Run this script to start the game.
"""

from ghost_grid.main import main

if __name__ == "__main__":
    main()
