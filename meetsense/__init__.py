"""
meetsense — keyword heuristics for meeting transcripts.

Classifies each utterance (emotion, sentiment, key points, action items,
decisions, due dates) and folds the results into meeting-level analytics.
"""

__version__ = "1.0.0"
