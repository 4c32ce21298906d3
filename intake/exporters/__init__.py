"""
Report exporters for Outreach Intake
"""

from .csv_exporter import CSVExporter

__all__ = ['CSVExporter']
