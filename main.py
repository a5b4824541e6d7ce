#!/usr/bin/env python3
"""
GitHub PR Generator - Main Entry Point

Reads the configured repository, asks the language model to implement a
change request typed at the terminal, and opens a pull request with the
result.

Usage:
    python main.py --interactive [--env-file .env.local] [--log-level DEBUG]

See `python main.py --help` and src/github_pr_generator/main.py for the
environment variables.
"""

import sys
from pathlib import Path

# Add src to Python path
sys.path.insert(0, str(Path(__file__).parent / "src"))

from github_pr_generator.main import main


if __name__ == "__main__":
    sys.exit(main())
