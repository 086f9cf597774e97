# Challenges Module
"""
Challenge solutions, one module per set.
"""

from .set1 import CHALLENGES, ChallengeContext, run_challenges

__all__ = [
    'CHALLENGES',
    'ChallengeContext',
    'run_challenges',
]
