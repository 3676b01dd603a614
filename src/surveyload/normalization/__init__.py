"""Normalization of raw cell text into typed values."""

from surveyload.normalization.org_node import OrgNode
from surveyload.normalization.values import convert_cell, convert_cell_value

__all__ = ["OrgNode", "convert_cell", "convert_cell_value"]
