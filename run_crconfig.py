#!/usr/bin/env python3
"""
Build a traffic router CRConfig.

Usage:
    python run_crconfig.py --cdn cdn1 --domain cdn1.example.com
    python run_crconfig.py --config crconfig.yaml --output crconfig.json
    python run_crconfig.py --cdn cdn1 --domain cdn1.example.com --fixture rows.yaml
"""

import sys

from src.crconfig.cli import main

if __name__ == "__main__":
    sys.exit(main())
