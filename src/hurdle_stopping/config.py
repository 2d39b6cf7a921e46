"""Default settings for the early-stopping analysis."""

from hurdle_stopping.core.hurdle import HurdleParams

# --- Decision ---
STOPPING_THRESHOLD = 5000.0  # Maximum acceptable revenue loss
HDI_PROB = 0.95
STOPPING_RULE = 'overlap'

# --- Posterior ---
N_DRAWS = 4000
PRIOR_ALPHA = 1.0  # Beta(1, 1) = uniform prior on purchase probability
PRIOR_BETA = 1.0

# --- Projection ---
# Hypothetical customers per arm the loss is projected over
SAMPLE_SIZE = 1000

# --- Demonstration scenarios ---
N_PER_GROUP = 10000
BASELINE = HurdleParams(hurdle_prob=0.6, log_mean=3.0, log_sd=1.0)

SCENARIOS = {
    'null': {
        'description': 'A/A test: treatment identical to control',
        'control': BASELINE,
        'treatment': BASELINE,
    },
    'effect': {
        'description': 'Treatment lowers log-mean basket size from 3.0 to 2.8',
        'control': BASELINE,
        'treatment': HurdleParams(hurdle_prob=0.6, log_mean=2.8, log_sd=1.0),
    },
}

RANDOM_STATE = 42
