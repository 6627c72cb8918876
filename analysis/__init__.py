"""
Analysis package for the Banker's Algorithm simulator.
Contains the session event log.
"""
