"""Strength engines grouped by astrological tradition."""
