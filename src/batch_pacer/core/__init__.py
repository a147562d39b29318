"""Boundary types shared by the scheduler and its callers."""
