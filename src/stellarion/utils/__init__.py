"""Utility functions for the Stellarion combat engine."""

from stellarion.utils.rng import chance, choose, generate_seed, make_rng

__all__ = ["chance", "choose", "generate_seed", "make_rng"]
