#!/usr/bin/env python3
"""
nash-stats - collector for completed Nash cash orders
Startup script for running from a source checkout.
"""

from nash_stats.cli.main import main

if __name__ == "__main__":
    main()
