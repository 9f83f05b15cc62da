"""
Algorithms package for the Banker's Algorithm evaluator.
Contains the safety check and request evaluation (deadlock avoidance).
"""
