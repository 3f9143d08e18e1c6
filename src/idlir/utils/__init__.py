"""Utility helpers shared across idlir."""
