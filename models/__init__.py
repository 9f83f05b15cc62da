"""
Models package for the Banker's Algorithm evaluator.
Contains the resource allocation state and the request model.
"""
