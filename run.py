#!/usr/bin/env python3
"""
run.py - Main entry point for Connect Four

Examples:
    # Two players at one terminal
    python run.py play

    # Skip the pause before the result and the restart confirmation
    python run.py play --delay 0 --no-confirm

    # Verbose engine logging written to a file as well
    python run.py --debug --log_file connectfour.log play

    # Time 1000 random games
    python run.py benchmark --games 1000 --seed 7
"""

from connectfour.interfaces.cli import main

if __name__ == "__main__":
    main()
