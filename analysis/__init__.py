"""
Analysis package for the Banker's Algorithm evaluator.
Contains the evaluation event log.
"""
