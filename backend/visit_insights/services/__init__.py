"""Sparkline, evolution, period and site services."""
