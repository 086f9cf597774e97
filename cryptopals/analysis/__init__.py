# Analysis Module
"""
Text analysis used to rank candidate plaintexts:
- Mean, standard deviation, covariance, Pearson correlation - stats.py
- ASCII frequency tables and English scoring - english.py
"""

from .stats import mean, std_dev, covariance, pearson
from .english import (
    EnglishScorer,
    calc_frequencies,
    euclidean_distance,
    extract_gutenberg_text,
    get_gutenberg_corpus,
)

__all__ = [
    # Statistics
    'mean',
    'std_dev',
    'covariance',
    'pearson',
    # English
    'EnglishScorer',
    'calc_frequencies',
    'euclidean_distance',
    'extract_gutenberg_text',
    'get_gutenberg_corpus',
]
