"""
Signal composition for Outreach Intake
"""

from .composer import compose_hiring_signals, compose_job_change, compose_location_move

__all__ = [
    'compose_hiring_signals',
    'compose_job_change',
    'compose_location_move',
]
