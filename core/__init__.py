"""
Core package - Security primitives and shared utilities.
"""
