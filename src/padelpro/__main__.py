"""
Main entry point for the padel billing application.
"""

import sys
from padelpro.cli import main

if __name__ == "__main__":
    sys.exit(main())
