"""
ai package – Adaptive gameplay engine for the snake game.

Modules:
    adaptive_director  – Engine entry point: strategy, food placement, difficulty
    behavior_model     – Player move statistics, 3-gram patterns, skill level
    food_placement     – Strategy scoring and weighted candidate choice
    ai_settings        – Immutable runtime toggles
    directions         – Grid directions, positions and heading helpers
    stats              – Per-game difficulty / strategy tracking
    simulation_runner  – Headless bot-vs-engine simulation
"""
