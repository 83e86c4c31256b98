"""Utility helpers for vecdb."""
