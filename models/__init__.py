"""
Models package for the Banker's Algorithm simulator.
Contains the allocation state, vector arithmetic and error kinds.
"""
