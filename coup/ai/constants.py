MCTS_NUM_SIMULATIONS = 1000
MCTS_EXPLORATION_CONSTANT = 1.414  # UCB1 exploration constant (sqrt(2))
MCTS_MAX_DEPTH = 10  # Plies per selection walk and per rollout

PRUNING_THRESHOLD = 300  # Visits a node needs before it can be pruned
PRUNING_FACTOR = 0.75  # Prune when UCB1 < parent UCB1 * factor

MIN_EXPANDED_NODES_FOR_TRANSPOSITION = 10  # Expansions per walk before the table is consulted
MCTS_TRANSPOSITION_TABLE_SIZE = 100000  # Maximum number of entries (LRU eviction)

WIN_REWARD = 20
HEURISTIC_REWARD = 10  # Reward when no winner was resolved
MERCY_MARGIN = 30  # Abandon a rollout when the AI trails by more than this

CHALLENGE_PROBABILITY = 0.2
KNOWN_CARD_CHALLENGE_BONUS = 0.2  # Challenger holds a copy of the claimed card
BLOCK_PROBABILITY = 0.3
BLOCK_CHALLENGE_PROBABILITY = 0.3

EVAL_NUM_GAMES = 10
EVAL_SEED = 42
EVAL_SAVE_INTERVAL = 5
EVAL_MAX_TURNS = 200

MCTS_TEST_NUM_SIMULATIONS = 200
MCTS_TEST_MAX_DEPTH = 6
MCTS_TEST_SEED = 42
