"""Spendify: expense insights API."""
