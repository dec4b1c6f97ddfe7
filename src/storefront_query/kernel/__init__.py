"""Kernel – errors, clocks and small value types shared by every layer."""
