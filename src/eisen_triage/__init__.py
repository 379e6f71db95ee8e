"""Eisenhower-matrix task triage: heuristic scoring with optional local-model refinement."""

__version__ = "0.1.0"
