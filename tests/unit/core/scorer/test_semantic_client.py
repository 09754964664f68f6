#!/usr/bin/env python3
"""
Test suite for the external semantic scoring client.

The HTTP session is mocked for the outcome branches; the whole-call deadline
is checked against a local HTTP server.
"""

import json
import threading
import time
import unittest
import uuid
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from types import SimpleNamespace
from unittest.mock import MagicMock

import requests

from core.config_loader import ScoringServiceConfig
from core.scorer.models import ScoringOutcome
from core.scorer.policy import merge_scoring_config
from core.scorer.semantic_client import SemanticScoringClient, build_scoring_payload

URL = "https://scorer.example.com/api/scoring/semantic"


def _response(ok=True, status_code=200, body=None, text="", json_error=None):
    response = MagicMock()
    response.ok = ok
    response.status_code = status_code
    response.text = text
    if json_error is not None:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body
    return response


class TestSemanticScoringClient(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock(spec=requests.Session)
        self.client = SemanticScoringClient(url=URL, api_key="secret", session=self.session)
        self.payload = {"application": {"id": "a1"}}

    def test_unconfigured(self):
        client = SemanticScoringClient(url=None, api_key="secret", session=self.session)
        verdict = client.score(self.payload)
        self.assertEqual(verdict.outcome, ScoringOutcome.UNCONFIGURED)
        self.assertEqual(verdict.score, 0)
        self.assertEqual(verdict.reason, "Scoring service not configured.")
        self.assertEqual(verdict.engine, "semantic-external")
        self.assertEqual(verdict.engine_version, "v1")
        self.session.post.assert_not_called()

    def test_missing_key_is_unconfigured(self):
        client = SemanticScoringClient(url=URL, api_key="", session=self.session)
        self.assertFalse(client.is_configured)
        self.assertEqual(client.score(self.payload).outcome, ScoringOutcome.UNCONFIGURED)

    def test_success(self):
        self.session.post.return_value = _response(body={
            "score": 87.6,
            "tier": "A",
            "reason": "Strong match.",
            "risks": ["Short tenure"],
            "redFlags": [],
            "interviewFocus": ["System design depth", 3],
            "engine": "semantic-v2",
            "engineVersion": "2.1",
        })
        verdict = self.client.score(self.payload)
        self.assertEqual(verdict.outcome, ScoringOutcome.SUCCESS)
        self.assertAlmostEqual(verdict.score, 87.6)
        self.assertEqual(verdict.tier, "A")
        self.assertEqual(verdict.reason, "Strong match.")
        self.assertEqual(verdict.risks, ["Short tenure"])
        self.assertEqual(verdict.interview_focus, ["System design depth"])
        self.assertEqual(verdict.engine, "semantic-v2")
        self.assertEqual(verdict.engine_version, "2.1")

    def test_request_shape(self):
        self.session.post.return_value = _response(body={"score": 50})
        self.client.score(self.payload)
        self.session.post.assert_called_once_with(
            URL,
            json=self.payload,
            headers={
                "Content-Type": "application/json",
                "Authorization": "Bearer secret",
            },
            timeout=5.0,
        )

    def test_score_clamped_and_bad_tier_dropped(self):
        self.session.post.return_value = _response(body={"score": 140, "tier": "Z"})
        verdict = self.client.score(self.payload)
        self.assertEqual(verdict.score, 100)
        self.assertIsNone(verdict.tier)
        self.assertEqual(verdict.engine, "semantic-external")

        self.session.post.return_value = _response(body={"score": -3})
        self.assertEqual(self.client.score(self.payload).score, 0)

    def test_http_error(self):
        self.session.post.return_value = _response(ok=False, status_code=503, text="down")
        verdict = self.client.score(self.payload)
        self.assertEqual(verdict.outcome, ScoringOutcome.HTTP_ERROR)
        self.assertEqual(verdict.reason, "Scoring service error (503)")
        self.assertEqual(verdict.score, 0)

    def test_timeout(self):
        self.session.post.side_effect = requests.Timeout("read timed out")
        verdict = self.client.score(self.payload)
        self.assertEqual(verdict.outcome, ScoringOutcome.TIMEOUT)
        self.assertEqual(verdict.reason, "Scoring service timeout.")
        self.assertEqual(verdict.score, 0)
        self.assertEqual(self.session.post.call_count, 1)

    def test_transport_error(self):
        self.session.post.side_effect = requests.ConnectionError("refused")
        verdict = self.client.score(self.payload)
        self.assertEqual(verdict.outcome, ScoringOutcome.TRANSPORT_ERROR)
        self.assertEqual(verdict.reason, "Unexpected error calling scoring service.")

    def test_non_json_body(self):
        self.session.post.return_value = _response(text="<html>", json_error=ValueError("no json"))
        verdict = self.client.score(self.payload)
        self.assertEqual(verdict.outcome, ScoringOutcome.MALFORMED)
        self.assertEqual(verdict.reason, "Scoring service returned invalid payload.")

    def test_invalid_score_values(self):
        for body in ({"score": "high"}, {"score": True}, {"score": float("nan")}, {}, [1, 2]):
            with self.subTest(body=body):
                self.session.post.return_value = _response(body=body)
                verdict = self.client.score(self.payload)
                self.assertEqual(verdict.outcome, ScoringOutcome.MALFORMED)
                self.assertEqual(verdict.score, 0)

    def test_timeout_configuration(self):
        client = SemanticScoringClient(url=URL, api_key="k", timeout_ms=1500, session=self.session)
        self.assertEqual(client.timeout_seconds, 1.5)
        self.assertEqual(SemanticScoringClient(timeout_ms=0).timeout_ms, 5000)

    def test_from_config(self):
        client = SemanticScoringClient.from_config(
            ScoringServiceConfig(url=URL, api_key="k", timeout_ms=2000)
        )
        self.assertTrue(client.is_configured)
        self.assertEqual(client.timeout_ms, 2000)
        client.close()

    def test_context_manager_closes_session(self):
        with SemanticScoringClient(url=URL, api_key="k", session=self.session):
            pass
        self.session.close.assert_called_once()


class _ScorerHandler(BaseHTTPRequestHandler):
    """Answers {"score": 90}; byte_delay > 0 trickles the body out one byte at a time."""
    byte_delay = 0.0

    def do_POST(self):
        length = int(self.headers.get("Content-Length") or 0)
        self.rfile.read(length)
        body = json.dumps({"score": 90}).encode("utf-8")
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.flush()
        try:
            for i in range(len(body)):
                if self.byte_delay:
                    time.sleep(self.byte_delay)
                self.wfile.write(body[i:i + 1])
                self.wfile.flush()
        except (BrokenPipeError, ConnectionResetError):
            pass

    def log_message(self, format, *args):
        pass


class _SlowScorerHandler(_ScorerHandler):
    byte_delay = 0.2


class TestSemanticScoringClientDeadline(unittest.TestCase):
    """Real HTTP round trips against a local server."""

    def _serve(self, handler):
        server = ThreadingHTTPServer(("127.0.0.1", 0), handler)
        server.daemon_threads = True
        thread = threading.Thread(target=server.serve_forever, daemon=True)
        thread.start()
        self.addCleanup(server.server_close)
        self.addCleanup(server.shutdown)
        return f"http://127.0.0.1:{server.server_address[1]}/api/scoring/semantic"

    def test_fast_server_succeeds(self):
        url = self._serve(_ScorerHandler)
        with SemanticScoringClient(url=url, api_key="k", timeout_ms=2000) as client:
            client.session.trust_env = False
            verdict = client.score({"application": {}})
        self.assertEqual(verdict.outcome, ScoringOutcome.SUCCESS)
        self.assertEqual(verdict.score, 90)

    def test_slow_body_hits_deadline(self):
        url = self._serve(_SlowScorerHandler)
        client = SemanticScoringClient(url=url, api_key="k", timeout_ms=1000)
        client.session.trust_env = False
        self.addCleanup(client.close)

        started = time.monotonic()
        verdict = client.score({"application": {}})
        elapsed = time.monotonic() - started

        self.assertLess(elapsed, 1.5, f"call took {elapsed:.2f}s with a 1000 ms timeout")
        self.assertEqual(verdict.outcome, ScoringOutcome.TIMEOUT)
        self.assertEqual(verdict.score, 0)
        self.assertEqual(verdict.reason, "Scoring service timeout.")


class TestBuildScoringPayload(unittest.TestCase):

    def setUp(self):
        self.tenant = SimpleNamespace(id=uuid.uuid4(), slug="acme", plan="pro", hiring_mode="volume")
        self.job = SimpleNamespace(
            id=uuid.uuid4(), title="Data Engineer", description="ETL", required_skills=["!Python"],
            experience_level="Mid", work_mode="remote", hiring_mode=None,
            location="Lagos", location_type="remote",
        )
        self.application = SimpleNamespace(
            id=uuid.uuid4(), full_name="Ada", email="ada@example.com", location="Lagos",
            cv_url="https://files/cv.pdf", cover_letter="Hi", github_url=None,
            linkedin_url="https://linkedin.com/in/ada", how_heard="referral", source="careers_site",
        )
        self.policy = merge_scoring_config(plan="pro", tenant_hiring_mode="volume")

    def test_payload_shape(self):
        payload = build_scoring_payload(self.tenant, self.job, None, self.application, self.policy,
                                        trigger="manual_rescore")
        self.assertEqual(payload["tenant"], {
            "id": str(self.tenant.id), "slug": "acme", "plan": "pro", "hiringMode": "volume",
        })
        self.assertEqual(payload["job"]["requiredSkills"], ["!Python"])
        self.assertEqual(payload["job"]["location"], "Lagos")
        self.assertEqual(payload["job"]["locationType"], "remote")
        self.assertIsNone(payload["candidate"])
        self.assertEqual(payload["application"]["linkedinUrl"], "https://linkedin.com/in/ada")
        self.assertEqual(payload["config"], self.policy.snapshot())
        self.assertEqual(payload["context"], {"trigger": "manual_rescore"})

    def test_candidate_block(self):
        candidate = SimpleNamespace(
            id=uuid.uuid4(), full_name="Ada", email="ada@example.com", location="Lagos",
            current_title="Engineer", current_company="Acme", cv_url=None,
        )
        payload = build_scoring_payload(self.tenant, self.job, candidate, self.application, self.policy)
        self.assertEqual(payload["candidate"]["currentTitle"], "Engineer")
        self.assertEqual(payload["context"]["trigger"], "application_created")


if __name__ == '__main__':
    unittest.main()
