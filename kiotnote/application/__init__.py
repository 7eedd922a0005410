"""Request/result workflows behind the kiotnote CLI.

Each workflow loads what it needs from a RecordRepository, runs the pure
parser or aggregator, saves the outcome and returns a frozen result with a
status instead of raising for user errors.
"""
