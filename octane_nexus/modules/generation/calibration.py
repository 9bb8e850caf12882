import threading
import logging
from octane_nexus.modules.generation.schemas import CalibrationState

logger = logging.getLogger(__name__)

OUTCOME_ADJUSTMENTS = {"viral": 2, "average": 0, "flop": -2}
MAX_BIAS = 15
FEEDBACK_PER_LEVEL = 3
MAX_LEVEL = 10


class ScoreCalibration:
    """Process-wide score bias learned from Reality Check feedback"""

    def __init__(self):
        self._lock = threading.Lock()
        self._bias = 0
        self._feedback_count = 0

    def _state(self) -> CalibrationState:
        level = min(MAX_LEVEL, 1 + self._feedback_count // FEEDBACK_PER_LEVEL)
        return CalibrationState(bias=self._bias, feedback_count=self._feedback_count, level=level)

    def apply_feedback(self, predicted_score: int, outcome: str) -> CalibrationState:
        adjustment = OUTCOME_ADJUSTMENTS[outcome]
        with self._lock:
            self._bias = max(-MAX_BIAS, min(MAX_BIAS, self._bias + adjustment))
            self._feedback_count += 1
            state = self._state()
        logger.info(
            f"Calibration feedback: predicted={predicted_score} outcome={outcome} bias={state.bias}"
        )
        return state

    def adjust(self, score: int) -> int:
        """Apply the bias and clamp to 0..100"""
        with self._lock:
            bias = self._bias
        return max(0, min(100, int(score) + bias))

    def state(self) -> CalibrationState:
        with self._lock:
            return self._state()

    def reset(self) -> None:
        with self._lock:
            self._bias = 0
            self._feedback_count = 0


calibration = ScoreCalibration()


def grade_for(score: int) -> str:
    if score >= 90:
        return "S"
    if score >= 80:
        return "A"
    if score >= 65:
        return "B"
    return "C"
