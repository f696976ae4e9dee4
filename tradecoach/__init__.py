"""Trading-psychology coaching scenario generator."""

__version__ = "0.1.0"

from .coaching import assess_coaching
from .errors import GenerationError, ValidationError
from .generator import ScenarioOrchestrator, generate_custom_scenario, generate_random_scenario
