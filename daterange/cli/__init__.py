"""
Command line interface for inspecting date ranges.
"""
