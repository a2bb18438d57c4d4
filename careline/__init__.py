"""Core domain logic for the careline doctor chat and booking app.

This package contains the business logic and domain models,
isolated from UI and platform APIs for easy testing and reasoning.
"""
