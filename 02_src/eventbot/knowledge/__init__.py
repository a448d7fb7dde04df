"""Knowledge base module."""

from .qna_client import IKnowledgeBase, QnAMakerClient, QnAResult, best_answer

__all__ = ["IKnowledgeBase", "QnAMakerClient", "QnAResult", "best_answer"]
