#!/usr/bin/env python3
"""Launcher for the numfmt command-line interface."""

from numfmt.cli import main


if __name__ == "__main__":
    main()
