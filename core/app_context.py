import contextlib
from dataclasses import dataclass
from typing import Any, Iterator, Optional

from core.config_loader import AppConfig
from core.scorer.semantic_client import SemanticScoringClient
from core.scorer.service import ScoringService


@dataclass
class AppContext:
    """Application context container that holds the loaded configuration.

    Neither DB access nor HTTP sessions are held here: a ScoringRepository is
    obtained via scoring_uow() per unit of work, and scoring_service() opens
    a fresh scoring client for that unit of work only.
    """
    config: AppConfig

    @classmethod
    def build(cls, config: AppConfig) -> "AppContext":
        """Build an AppContext from config.

        Args:
            config: Loaded application configuration

        Returns:
            AppContext instance (no DB session or HTTP session attached)
        """
        return cls(config=config)

    def new_scoring_client(self) -> Optional[SemanticScoringClient]:
        """A client with its own HTTP session, or None when scoring runs locally."""
        if self.config.scoring.engine_mode != "external":
            return None
        return SemanticScoringClient.from_config(self.config.scoring.service)

    @contextlib.contextmanager
    def scoring_service(self, repo: Any) -> Iterator[ScoringService]:
        """ScoringService bound to one unit of work's repository; its client is closed on exit."""
        client = self.new_scoring_client()
        try:
            yield ScoringService(
                repo,
                client=client,
                engine_mode=self.config.scoring.engine_mode,
                trigger=self.config.scoring.trigger,
            )
        finally:
            if client is not None:
                client.close()
