#!/usr/bin/env python3
"""
Scoring Module - Candidate-to-job scoring.

Public API:
- ScoringService: Orchestrator (load, resolve policy, score, persist)
- ScoredApplicationView: What callers get back
- SemanticScoringClient: Client for the external scoring microservice

Modules:

- models.py: Data structures (profiles, flags, verdicts, views)
- skills.py: Skill token normalization and text matching
- categories.py: The five category scorers
- policy.py: ScoringPolicy and the default < tenant < job merge
- aggregation.py: Weighted aggregation, tiering, interview focus, summary
- heuristic.py: Embedded engine built from the category scorers
- semantic_client.py: External engine client and request payload
- reference_engine.py: Presence-based engine behind /api/scoring/semantic
- coverage.py: Structured skill coverage for the audit trail
- persistence.py: Match field update and ScoringEvent append
- service.py: ScoringService orchestrator
"""

from core.scorer.models import ScoredApplicationView
from core.scorer.semantic_client import SemanticScoringClient
from core.scorer.service import ScoringService

__all__ = ['ScoringService', 'ScoredApplicationView', 'SemanticScoringClient']
