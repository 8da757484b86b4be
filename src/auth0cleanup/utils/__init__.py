"""Utility helpers: CSV formatting, URLs, logging and console output."""
