"""Correction chain from geometric heliocentric vectors to the apparent place.

Each step is a pure function taking and returning 3-vectors (equatorial, AU).
"""
