"""Workflow client, worker, contexts and options for a durable task engine."""

__version__ = "1.0.0"