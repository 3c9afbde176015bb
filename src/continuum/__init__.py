"""Continuum: a personal decision journal with heuristic insights."""
