"""Game domain services: per-game state, rules and scoring.

Each module owns one game's stored record and the pure functions that
change it. HTTP routes and socket handlers go through ``registry`` so
transport concerns stay out of the game rules.
"""
