"""
Coup - a two-player Coup table with a Monte Carlo Tree Search AI opponent.
"""
