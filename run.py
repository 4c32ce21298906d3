#!/usr/bin/env python3
"""
Outreach Intake - Entry Point

Usage:
    python run.py contacts leads.csv     # Import contact leads
    python run.py organizations orgs.csv # Import organizations
    python run.py config                 # Show configuration status
    python run.py version                # Show version
"""

import sys

from intake.cli import main

if __name__ == '__main__':
    sys.exit(main())
