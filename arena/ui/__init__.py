"""
User interface module for the arena.

Provides the console stepper used to play a match interactively.
"""
