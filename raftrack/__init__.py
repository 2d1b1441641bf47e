"""Follower progress and in-flight message tracking for Raft leaders."""

__version__ = "0.1.0"
__all__ = ["inflights", "progress"]