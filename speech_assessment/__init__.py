"""
Transcript assessment engine for speaking practice: compares the sentence a
learner was asked to read with what speech recognition heard, word by word.
"""

__all__ = [
    "config",
    "schemas",
    "assess",
    "AssessmentService",
]

from speech_assessment.services.assessment_service import AssessmentService, assess
