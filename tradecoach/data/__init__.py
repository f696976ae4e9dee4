from .profiles import (
    STRATEGIES,
    TRADER_PROFILES,
    get_random_trader_profile,
    get_trader_profile_by_id,
)
from .scenarios import (
    TRADING_SCENARIOS,
    generate_price_action,
    get_filtered_scenarios,
    get_random_scenario,
    get_scenario_by_id,
)
from .tables import (
    EMOTION_TO_BEHAVIORS,
    MARKET_EMOTION_POOL,
    MARKET_TRIGGER_PHRASES,
    SESSION_WINDOWS,
)
