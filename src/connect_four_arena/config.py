"""
Configuration for Connect Four strategy simulations.
"""

# Search Configuration
SEARCH_CONFIG = {
    'depth': 6,                 # Plies searched, including the root move
    'use_cache': True,          # Transposition table on/off (scores are identical either way)
}

# Evaluator Configuration
EVALUATOR_CONFIG = {
    'weights': (1, 5, 100),     # Live windows holding 1, 2, 3 stones
}

# Pattern-following strategy: answer at (last column + dx, last row + dy)
OFFSET_CONFIG = {
    'dx': 1,
    'dy': 0,
}

# Simulation Configuration
SIMULATION_CONFIG = {
    'count': 10,                # Games per ordered pairing
    'batch_size': 5,            # Games between CSV appends
    'output_path': 'out.csv',
    'strategies': ['minimax', 'offset', 'greedy'],
    'mode': 'all',              # 'all' = every ordered pair, 'field' = first vs the rest
}
