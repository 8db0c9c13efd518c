"""Game domain services: question drawing, answer scoring and session lifecycle.

This package contains the game logic imported by the HTTP routes, keeping
transport concerns separated from core game mechanics.
"""
