"""
Column mappers for Outreach Intake
"""

from .auto_mapper import AutoMapper, classify_column, classify_organization_column

__all__ = ['AutoMapper', 'classify_column', 'classify_organization_column']
