"""
Kindred Services Layer

Detection, safety, assessment and orchestration services.
"""
