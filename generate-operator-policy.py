#!/usr/bin/env python3
"""
AutoShift Operator Policy Generator Entry Point

This script provides a simple entry point for the policy generator.
All application logic is contained in the policy_generator.libs.main_app module.
"""

import sys
from pathlib import Path

# Make the policy_generator package importable without installation
sys.path.insert(0, str(Path(__file__).resolve().parent))

# Logging will be configured by main_app.main()

if __name__ == "__main__":
    try:
        from policy_generator.libs.main_app import main
    except ImportError as e:
        print(f"Error importing main application: {e}", file=sys.stderr)
        print("Please install the dependencies: pip install -e .", file=sys.stderr)
        sys.exit(1)
    main()
