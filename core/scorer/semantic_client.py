"""External semantic scoring client with bounded timeout and total fallback."""

import concurrent.futures
import logging
from typing import Any, Dict, List, Optional

import requests

from core.config_loader import ScoringServiceConfig
from core.utils import is_finite_number
from core.scorer.models import TIERS, EngineVerdict, ScoringOutcome
from core.scorer.policy import ScoringPolicy

logger = logging.getLogger(__name__)

ENGINE_NAME = "semantic-external"
ENGINE_VERSION = "v1"
DEFAULT_TIMEOUT_MS = 5000


def _fallback(outcome: ScoringOutcome, reason: str) -> EngineVerdict:
    return EngineVerdict(
        score=0,
        reason=reason,
        engine=ENGINE_NAME,
        engine_version=ENGINE_VERSION,
        outcome=outcome,
    )


def _string_list(value: Any) -> List[str]:
    if not isinstance(value, list):
        return []
    return [item for item in value if isinstance(item, str)]


def _optional_str(value: Any) -> Optional[str]:
    return value if isinstance(value, str) and value else None


def build_scoring_payload(
    tenant: Any,
    job: Any,
    candidate: Any,
    application: Any,
    policy: ScoringPolicy,
    trigger: str = "application_created"
) -> Dict[str, Any]:
    """Request body for the external scorer. Carries the resolved policy so the
    service does not have to re-derive tenant/job configuration."""
    return {
        'tenant': {
            'id': str(tenant.id),
            'slug': tenant.slug,
            'plan': tenant.plan,
            'hiringMode': tenant.hiring_mode,
        },
        'job': {
            'id': str(job.id),
            'title': job.title,
            'description': job.description,
            'requiredSkills': list(job.required_skills or []),
            'experienceLevel': job.experience_level,
            'workMode': job.work_mode,
            'hiringMode': job.hiring_mode,
            'location': job.location,
            'locationType': job.location_type,
        },
        'candidate': {
            'id': str(candidate.id),
            'fullName': candidate.full_name,
            'email': candidate.email,
            'location': candidate.location,
            'currentTitle': candidate.current_title,
            'currentCompany': candidate.current_company,
            'cvUrl': candidate.cv_url,
        } if candidate is not None else None,
        'application': {
            'id': str(application.id),
            'fullName': application.full_name,
            'email': application.email,
            'location': application.location,
            'cvUrl': application.cv_url,
            'coverLetter': application.cover_letter,
            'githubUrl': application.github_url,
            'linkedinUrl': application.linkedin_url,
            'howHeard': application.how_heard,
            'source': application.source,
        },
        'config': policy.snapshot(),
        'context': {
            'trigger': trigger,
        },
    }


class SemanticScoringClient:
    """
    Client for the pluggable scoring microservice.

    Makes at most one POST per call and never raises for transport reasons:
    every branch (unconfigured, HTTP error, timeout, malformed payload,
    connection failure) comes back as a well-formed EngineVerdict so the
    orchestrator can always persist something.

    timeout_ms bounds the whole call (connect, headers and body). A request
    still in flight at the deadline is abandoned to its worker thread, which
    ends at the next per-read socket timeout.
    """

    def __init__(
        self,
        url: Optional[str] = None,
        api_key: Optional[str] = None,
        timeout_ms: int = DEFAULT_TIMEOUT_MS,
        session: Optional[requests.Session] = None
    ):
        self.url = url or None
        self.api_key = api_key or None
        self.timeout_ms = timeout_ms if timeout_ms and timeout_ms > 0 else DEFAULT_TIMEOUT_MS
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config: ScoringServiceConfig) -> "SemanticScoringClient":
        return cls(url=config.url, api_key=config.api_key, timeout_ms=config.timeout_ms)

    @property
    def is_configured(self) -> bool:
        return bool(self.url and self.api_key)

    @property
    def timeout_seconds(self) -> float:
        return self.timeout_ms / 1000.0

    def _post(self, payload: Dict[str, Any]) -> requests.Response:
        return self.session.post(
            self.url,
            json=payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": f"Bearer {self.api_key}",
            },
            timeout=self.timeout_seconds,
        )

    def score(self, payload: Dict[str, Any]) -> EngineVerdict:
        """Send one scoring request and classify the result."""
        if not self.is_configured:
            logger.warning(
                "SCORING_SERVICE_URL or SCORING_SERVICE_API_KEY not configured - returning neutral score."
            )
            return _fallback(ScoringOutcome.UNCONFIGURED, "Scoring service not configured.")

        # requests' timeout is per socket operation; the wait on the worker
        # is the deadline for the whole call, body included.
        executor = concurrent.futures.ThreadPoolExecutor(
            max_workers=1, thread_name_prefix="semantic-scoring"
        )
        future = executor.submit(self._post, payload)
        try:
            response = future.result(timeout=self.timeout_seconds)
        except (concurrent.futures.TimeoutError, requests.Timeout):
            future.cancel()
            logger.error(f"Scoring service timed out after {self.timeout_ms} ms")
            return _fallback(ScoringOutcome.TIMEOUT, "Scoring service timeout.")
        except requests.RequestException as e:
            logger.error(f"Unexpected error calling scoring service: {e}")
            return _fallback(
                ScoringOutcome.TRANSPORT_ERROR, "Unexpected error calling scoring service."
            )
        finally:
            executor.shutdown(wait=False)

        if not response.ok:
            logger.error(
                f"Scoring service returned non-2xx: {response.status_code} {response.text[:500]}"
            )
            return _fallback(
                ScoringOutcome.HTTP_ERROR, f"Scoring service error ({response.status_code})"
            )

        try:
            body = response.json()
        except ValueError:
            logger.error(f"Scoring service returned non-JSON body: {response.text[:500]}")
            return _fallback(ScoringOutcome.MALFORMED, "Scoring service returned invalid payload.")

        if not isinstance(body, dict) or not is_finite_number(body.get('score')):
            logger.error(f"Invalid score payload: {body!r}")
            return _fallback(ScoringOutcome.MALFORMED, "Scoring service returned invalid payload.")

        tier = body.get('tier')
        return EngineVerdict(
            score=min(100.0, max(0.0, float(body['score']))),
            reason=_optional_str(body.get('reason')),
            tier=tier if tier in TIERS else None,
            risks=_string_list(body.get('risks')),
            red_flags=_string_list(body.get('redFlags')),
            interview_focus=_string_list(body.get('interviewFocus')),
            engine=_optional_str(body.get('engine')) or ENGINE_NAME,
            engine_version=_optional_str(body.get('engineVersion')),
            outcome=ScoringOutcome.SUCCESS,
        )

    def close(self):
        """Close the session and release resources."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
