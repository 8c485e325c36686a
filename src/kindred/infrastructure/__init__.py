"""
Kindred Infrastructure Layer

Metrics and error tracking integrations.
"""
