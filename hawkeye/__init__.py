"""Hawk Eye catalog backend."""
