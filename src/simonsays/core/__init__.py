"""Core game logic and data structures."""

from . import constants, fsm, ranges, scheduler, schemas, sequence, verifier

__all__ = ["constants", "fsm", "ranges", "scheduler", "schemas", "sequence", "verifier"]
