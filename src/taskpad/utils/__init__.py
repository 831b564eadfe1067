"""Shared helpers for taskpad."""
