"""Adapters for image listings and delivery URLs."""
