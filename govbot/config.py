import math
import os
from dataclasses import dataclass, field
from typing import Dict, List, Tuple

from dotenv import load_dotenv

from govbot.lib.logger import configure_logger

logger = configure_logger(__name__)

load_dotenv()


def _keywords(env_name: str, default: str) -> List[str]:
    """Read a comma separated keyword list, falling back to the default."""
    raw = os.getenv(env_name, default)
    return [word.strip().lower() for word in raw.split(",") if word.strip()]


@dataclass
class ScoringWeights:
    technical_feasibility: float = float(
        os.getenv("GOVBOT_WEIGHT_TECHNICAL_FEASIBILITY", "0.20")
    )
    alignment_with_goals: float = float(
        os.getenv("GOVBOT_WEIGHT_ALIGNMENT_WITH_GOALS", "0.20")
    )
    economic_implications: float = float(
        os.getenv("GOVBOT_WEIGHT_ECONOMIC_IMPLICATIONS", "0.15")
    )
    security_implications: float = float(
        os.getenv("GOVBOT_WEIGHT_SECURITY_IMPLICATIONS", "0.15")
    )
    community_sentiment: float = float(
        os.getenv("GOVBOT_WEIGHT_COMMUNITY_SENTIMENT", "0.15")
    )
    track_specific: float = float(os.getenv("GOVBOT_WEIGHT_TRACK_SPECIFIC", "0.15"))

    def as_dict(self) -> Dict[str, float]:
        return {
            "technical_feasibility": self.technical_feasibility,
            "alignment_with_goals": self.alignment_with_goals,
            "economic_implications": self.economic_implications,
            "security_implications": self.security_implications,
            "community_sentiment": self.community_sentiment,
            "track_specific": self.track_specific,
        }

    def total(self) -> float:
        return math.fsum(self.as_dict().values())


@dataclass
class DecisionThresholds:
    aye: float = float(os.getenv("GOVBOT_AYE_THRESHOLD", "0.8"))
    abstain: float = float(os.getenv("GOVBOT_ABSTAIN_THRESHOLD", "0.5"))


@dataclass
class ScoringKeywords:
    """Keyword lists driving the text heuristics.

    These are tunable data, not part of the scoring algorithm. Each list can be
    overridden with a comma separated environment variable.
    """

    technical: List[str] = field(
        default_factory=lambda: _keywords(
            "GOVBOT_KEYWORDS_TECHNICAL",
            "implementation,code,technical,development,upgrade,runtime",
        )
    )
    alignment: List[str] = field(
        default_factory=lambda: _keywords(
            "GOVBOT_KEYWORDS_ALIGNMENT",
            "ecosystem,community,decentralization,security,scalability,interoperability",
        )
    )
    security: List[str] = field(
        default_factory=lambda: _keywords(
            "GOVBOT_KEYWORDS_SECURITY", "security,audit,vulnerability,risk,safe"
        )
    )
    budget_planning: List[str] = field(
        default_factory=lambda: _keywords(
            "GOVBOT_KEYWORDS_BUDGET_PLANNING", "budget,milestone,deliverable"
        )
    )
    adoption: List[str] = field(
        default_factory=lambda: _keywords(
            "GOVBOT_KEYWORDS_ADOPTION", "institutional,adoption,compliance"
        )
    )
    # Ordered: the first matching category wins
    proposal_types: List[Tuple[str, List[str]]] = field(
        default_factory=lambda: [
            ("treasury", _keywords("GOVBOT_KEYWORDS_TREASURY", "treasury,funding,payment,tip")),
            ("staking", _keywords("GOVBOT_KEYWORDS_STAKING", "staking,validator,nomination")),
            ("fellowship", _keywords("GOVBOT_KEYWORDS_FELLOWSHIP", "fellowship,rank,member")),
            ("admin", _keywords("GOVBOT_KEYWORDS_ADMIN", "admin,parameter,configuration")),
            ("root", _keywords("GOVBOT_KEYWORDS_ROOT", "runtime,upgrade,protocol")),
            ("whitelisted", _keywords("GOVBOT_KEYWORDS_WHITELISTED", "whitelist,privilege")),
        ]
    )


@dataclass
class ScoringConfig:
    weights: ScoringWeights = field(default_factory=ScoringWeights)
    thresholds: DecisionThresholds = field(default_factory=DecisionThresholds)
    keywords: ScoringKeywords = field(default_factory=ScoringKeywords)

    # Approximate tokens per USD; not a price feed
    usd_per_token_rate: float = float(os.getenv("GOVBOT_USD_PER_TOKEN", "7"))
    planck_decimals: int = int(os.getenv("GOVBOT_PLANCK_DECIMALS", "10"))
    budget_medium_cutoff: float = float(
        os.getenv("GOVBOT_BUDGET_MEDIUM_CUTOFF", "100")
    )
    budget_high_cutoff: float = float(os.getenv("GOVBOT_BUDGET_HIGH_CUTOFF", "1000"))

    neutral_cost_effectiveness: float = 0.5
    # Number of trailing votes used to dampen community sentiment
    sentiment_window: int = int(os.getenv("GOVBOT_SENTIMENT_WINDOW", "3"))
    # Number of trailing votes reported as "recent performance"
    report_window: int = int(os.getenv("GOVBOT_REPORT_WINDOW", "5"))


@dataclass
class ChatConfig:
    max_chats: int = int(os.getenv("GOVBOT_MAX_CHATS", "10"))
    warning_threshold: int = int(os.getenv("GOVBOT_CHAT_WARNING_THRESHOLD", "8"))
    vote_history_limit: int = int(os.getenv("GOVBOT_VOTE_HISTORY_LIMIT", "20"))
    chat_history_limit: int = int(os.getenv("GOVBOT_CHAT_HISTORY_LIMIT", "10"))
    # Ballot used when a chat turn convinces GovBot to vote Aye or Nay
    auto_vote_conviction: int = int(os.getenv("GOVBOT_AUTO_VOTE_CONVICTION", "1"))
    auto_vote_balance: str = os.getenv("GOVBOT_AUTO_VOTE_BALANCE", "100000000")


@dataclass
class ChatLLMConfig:
    """Configuration for the chat model behind GovBot's replies."""

    default_model: str = os.getenv("GOVBOT_CHAT_DEFAULT_MODEL", "qwen-qwq-32b")
    default_temperature: float = float(
        os.getenv("GOVBOT_CHAT_DEFAULT_TEMPERATURE", "0.6")
    )
    api_base: str = os.getenv("GOVBOT_CHAT_API_BASE", "https://api.groq.com/openai/v1")
    api_key: str = os.getenv("GOVBOT_CHAT_API_KEY", "")


@dataclass
class NetworkConfig:
    network: str = os.getenv("NETWORK", "polkadot")


@dataclass
class Config:
    scoring: ScoringConfig = field(default_factory=ScoringConfig)
    chat: ChatConfig = field(default_factory=ChatConfig)
    chat_llm: ChatLLMConfig = field(default_factory=ChatLLMConfig)
    network: NetworkConfig = field(default_factory=NetworkConfig)

    def validate(self) -> None:
        """Check the scoring invariants; raises ValueError when broken."""
        total = self.scoring.weights.total()
        if not math.isclose(total, 1.0, abs_tol=1e-9):
            raise ValueError(f"Scoring weights must sum to 1.0, got {total}")

        thresholds = self.scoring.thresholds
        if not 0.0 <= thresholds.abstain <= thresholds.aye <= 1.0:
            raise ValueError(
                "Decision thresholds must satisfy 0 <= abstain <= aye <= 1, "
                f"got abstain={thresholds.abstain} aye={thresholds.aye}"
            )

        if self.scoring.usd_per_token_rate <= 0:
            raise ValueError("GOVBOT_USD_PER_TOKEN must be positive")

    @classmethod
    def load(cls) -> "Config":
        """Load and validate configuration"""
        config = cls()
        config.validate()
        logger.info("Configuration loaded successfully")
        return config


# Global configuration instance
config = Config.load()
