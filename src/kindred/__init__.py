"""
Kindred - Crisis Risk Engine for Peer-Support Chat

This package provides the crisis-risk scoring and emotional-state
estimation engine behind the Kindred peer-support platform.

IMPORTANT: This is a safety-critical component. Risk thresholds
and keyword sets require clinical review before production use.
"""

__version__ = "0.1.0"
__author__ = "Kindred Engineering Team"
