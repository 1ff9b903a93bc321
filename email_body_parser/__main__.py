#!/usr/bin/env python3
"""
Entry point for running the CLI as a module.
Usage: python -m email_body_parser message.eml [args]
"""

import sys

from .cli import main

if __name__ == "__main__":
    sys.exit(main())
