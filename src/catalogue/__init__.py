"""Catalogue bounded context — display currency and personalization.

Formats base-currency prices for display and ranks catalogue products using
the shopper's recent browsing history.
"""
