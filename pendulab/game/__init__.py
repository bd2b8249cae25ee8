"""Challenge logic: oscillation detection, termination rules, verification code."""

from pendulab.game.detector import OscillationDetector
from pendulab.game.evaluator import ChallengeEvaluator, FinishReason, GamePhase
from pendulab.game.token import FAILED_CODE, verification_code

__all__ = [
    "OscillationDetector",
    "ChallengeEvaluator",
    "FinishReason",
    "GamePhase",
    "FAILED_CODE",
    "verification_code",
]
