"""Utility functions for sharedledger."""

from sharedledger.utils.date_parser import parse_date
from sharedledger.utils.amount_parser import parse_amount, format_amount
from sharedledger.utils.resolvers import resolve_group, resolve_participant

__all__ = [
    "parse_date",
    "parse_amount",
    "format_amount",
    "resolve_group",
    "resolve_participant",
]
