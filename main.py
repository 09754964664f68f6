import argparse
import json
import logging
import sys

from core.app_context import AppContext
from core.config_loader import load_config
from database.database import build_engine, build_session_factory
from database.init_db import init_db
from database.uow import scoring_uow

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


def score_application(application_id: str, config_path: str) -> int:
    """Score one application and print the view as JSON. Returns the process exit code."""
    config = load_config(config_path)
    context = AppContext.build(config)
    session_factory = build_session_factory(build_engine(config.database.url))
    with scoring_uow(session_factory) as repo:
        with context.scoring_service(repo) as service:
            view = service.score_and_persist_application(application_id, trigger="manual_rescore")

    if view is None:
        logger.error(f"Application {application_id} not found")
        return 1

    print(json.dumps(view.as_dict(), indent=2))
    return 0


def serve(config_path: str) -> int:
    import uvicorn

    config = load_config(config_path)
    logger.info(f"Starting TalentScore Web Server on {config.web.host}:{config.web.port}")
    uvicorn.run(
        "web.backend.app:app",
        host=config.web.host,
        port=config.web.port,
        reload=False,
        log_level="info"
    )
    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="TalentScore - candidate-to-job scoring")
    parser.add_argument("--config", default="config.yaml", help="Path to config.yaml")
    subparsers = parser.add_subparsers(dest="command", required=True)

    subparsers.add_parser("init-db", help="Create database tables")

    score_parser = subparsers.add_parser("score", help="Score one job application")
    score_parser.add_argument("application_id", help="Job application UUID")

    subparsers.add_parser("serve", help="Run the web API")

    args = parser.parse_args(argv)

    if args.command == "init-db":
        init_db(build_engine(load_config(args.config).database.url))
        return 0
    if args.command == "score":
        return score_application(args.application_id, args.config)
    return serve(args.config)


if __name__ == "__main__":
    sys.exit(main())
