"""Callable protocol for neuroscale."""

from neuroscale.callable.execute import execute
from neuroscale.callable.result import BatchStats, CallableResult, SubmissionFailure

__all__ = ["BatchStats", "CallableResult", "SubmissionFailure", "execute"]
