#!/usr/bin/env python3
"""
Minefield - main entry point.

Usage:
    python main.py play [--preset {beginner,classic,intermediate}] [--seed N]
    python main.py simulate [--games N]
"""
from minefield.cli import main


if __name__ == "__main__":
    main()
