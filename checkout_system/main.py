#!/usr/bin/env python3
"""Main entry point for the checkout simulation package."""

import sys
from checkout_system.scripts.run_simulation import main

if __name__ == '__main__':
    sys.exit(main())
