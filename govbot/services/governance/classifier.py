"""Proposal type classification."""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from govbot.backend.models import ProposalType
from govbot.config import config
from govbot.lib.logger import configure_logger

logger = configure_logger(__name__)


class ProposalClassifier(ABC):
    """Maps proposal text to a proposal category.

    Implementations must be deterministic: the same text always yields the
    same category.
    """

    @abstractmethod
    def classify(self, title: str, description: str) -> Optional[ProposalType]:
        pass


class KeywordProposalClassifier(ProposalClassifier):
    """Ordered keyword lookup; the first category with a matching keyword wins."""

    def __init__(self, categories: Optional[Sequence[Tuple[str, List[str]]]] = None):
        if categories is None:
            categories = config.scoring.keywords.proposal_types
        self.categories = [
            (ProposalType(name), [keyword.lower() for keyword in keywords])
            for name, keywords in categories
        ]

    def classify(self, title: str, description: str) -> Optional[ProposalType]:
        content = f"{title or ''} {description or ''}".lower()

        for proposal_type, keywords in self.categories:
            if any(keyword in content for keyword in keywords):
                logger.debug(f"Classified proposal as {proposal_type}")
                return proposal_type

        return None


def classify_proposal(
    title: str,
    description: str,
    classifier: Optional[ProposalClassifier] = None,
) -> Optional[ProposalType]:
    """Classify proposal text with the given classifier or the keyword default."""
    classifier = classifier or KeywordProposalClassifier()
    return classifier.classify(title, description)
