"""
Surveyload: schema-driven survey data validation.

This package reconciles survey CSV headers against a declared schema,
converts cells into bounded integers, and reports data errors under
fail-fast or capture-all policies.
"""

from importlib.metadata import version

__version__ = version("surveyload")

__all__ = ["__version__"]
