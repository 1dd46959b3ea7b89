"""Orchestration layer.

This module contains the high-level workflow orchestrator that coordinates
the execution of an archive synchronization run.
"""

from conversation_archive.orchestrators.conversation_sync import ConversationSync

__all__ = [
    "ConversationSync",
]
