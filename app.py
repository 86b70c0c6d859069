#!/usr/bin/env python3
"""
Main entry point for devtools-hub when running from a source checkout.
Adds the src directory to the Python path and runs the launcher.
"""

import os
import sys
from pathlib import Path

project_root = Path(__file__).parent
sys.path.insert(0, str(project_root / "src"))

from devtools_hub.cli import main

if __name__ == '__main__':
    # Relative config paths resolve against the project root
    os.chdir(project_root)
    main()
