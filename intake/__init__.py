"""Outreach Intake - bulk CSV import of outreach organizations and contact leads"""

from core import __version__

__all__ = ['__version__']
