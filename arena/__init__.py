"""
Arena package for the dice-pool combat simulator.

This package contains the combat resolution engine, the initiative scheduler,
the match orchestrator and batch runner, together with the character, weapon
and map data they operate on.
"""
