from .assessment import ADVICE_KEYWORDS, assess_coaching, score_advice, score_behaviors
