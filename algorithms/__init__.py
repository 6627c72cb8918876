"""
Algorithms package for the Banker's Algorithm simulator.
Contains the safety algorithm and the resource-request (avoidance) algorithm.
"""
