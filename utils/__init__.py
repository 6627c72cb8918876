"""
Utilities package for the Banker's Algorithm simulator.
Contains the state codec, scenario loader and logger.
"""
