"""
Utilities for the Banker's Algorithm evaluator: input parsing and logging.
"""
