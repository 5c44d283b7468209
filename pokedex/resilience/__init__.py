"""Retry with exponential backoff for transient upstream failures."""
from .retry import RetryAttempt, RetryPolicy, calculate_delay, should_retry

__all__ = [
    'RetryAttempt',
    'RetryPolicy',
    'calculate_delay',
    'should_retry',
]
