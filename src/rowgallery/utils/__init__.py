"""Utility helpers shared across rowgallery."""
