"""Kindred domain layer: enums and data models."""
