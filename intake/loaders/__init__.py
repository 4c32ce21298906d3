"""
Table loaders for Outreach Intake
"""

from .base import TableLoader
from .csv_loader import CSVLoader
from .tokenizer import parse_table, tokenize_line

__all__ = ['TableLoader', 'CSVLoader', 'parse_table', 'tokenize_line']
