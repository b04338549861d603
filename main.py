import logging
import sys
import json
import argparse
from typing import Any, Dict, List, Optional

import yaml
from dateutil import parser as date_parser

from jobmatch.config_loader import load_config, LoggingConfig, ResultPolicy
from jobmatch.exceptions import MatchingError, InvalidInputError
from jobmatch.scorer import MatchingEngine, MatchResult

DEFAULT_LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

logger = logging.getLogger(__name__)


def load_records(path: str) -> Any:
    """Load JSON or YAML data from a file."""
    logger.info(f"Loading records from {path}")
    try:
        with open(path, 'r') as f:
            if path.endswith('.json'):
                return json.load(f)
            return yaml.safe_load(f)
    except FileNotFoundError as e:
        raise InvalidInputError(f"File not found: {path}") from e
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise InvalidInputError(f"Could not parse {path}: {e}") from e


def load_opportunities(path: str) -> List[Dict[str, Any]]:
    """Opportunities file holds a list, or a mapping with an 'opportunities' list."""
    data = load_records(path)
    if isinstance(data, dict) and 'opportunities' in data:
        data = data['opportunities']
    if not isinstance(data, list):
        raise InvalidInputError(f"{path} must contain a list of opportunities", record='opportunity')
    return data


def load_profile(path: str) -> Dict[str, Any]:
    data = load_records(path)
    if not isinstance(data, dict):
        raise InvalidInputError(f"{path} must contain a single profile mapping", record='profile')
    return data


def parse_as_of(value: str):
    try:
        return date_parser.isoparse(value).date()
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an ISO date: {value!r}")


def positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {value!r}")
    if number < 1:
        raise argparse.ArgumentTypeError(f"must be >= 1, got {number}")
    return number


def configure_logging(logging_config: LoggingConfig) -> None:
    """Apply the configured level and format to the root logger's handlers."""
    root = logging.getLogger()
    root.setLevel(logging_config.level)
    formatter = logging.Formatter(logging_config.format)
    for handler in root.handlers:
        handler.setFormatter(formatter)


def format_text(results: List[MatchResult], titles: Dict[str, str]) -> str:
    lines = []
    for rank, result in enumerate(results, 1):
        title = titles.get(result.opportunity_id, '')
        lines.append(f"{rank:>3}. [{result.overall_score:>3}] {result.opportunity_id}  {title}".rstrip())
        lines.append(f"       confidence: {result.confidence_level}"
                     + (f"  tags: {', '.join(result.tags)}" if result.tags else ""))
        for sentence in result.reasoning:
            lines.append(f"       - {sentence}")
    if not results:
        lines.append("No matches above the threshold.")
    return "\n".join(lines)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="JobMatch - score opportunities against a profile")
    parser.add_argument('--profile', required=True, help='Profile file (JSON or YAML)')
    parser.add_argument('--opportunities', required=True, help='Opportunities file (JSON or YAML list)')
    parser.add_argument('--config', default=None, help='Config file (YAML); defaults apply when omitted')
    parser.add_argument('--min-score', type=int, default=None,
                        help='Minimum overall score to keep (default from config, 60)')
    parser.add_argument('--top-k', type=positive_int, default=None, help='Keep at most K results')
    parser.add_argument('--workers', type=positive_int, default=None, help='Thread pool size for batch scoring')
    parser.add_argument('--as-of', type=parse_as_of, default=None,
                        help='Reference date for availability/posting age (YYYY-MM-DD, default today)')
    parser.add_argument('--format', choices=['text', 'json'], default='text', help='Output format')
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(level=logging.INFO, format=DEFAULT_LOG_FORMAT)

    try:
        config = load_config(args.config)
        configure_logging(config.logging)

        policy_data = config.matching.result_policy.model_dump()
        if args.min_score is not None:
            policy_data['min_score'] = args.min_score
        if args.top_k is not None:
            policy_data['top_k'] = args.top_k
        policy = ResultPolicy(**policy_data)

        engine = MatchingEngine(config.matching)
        profile = load_profile(args.profile)
        opportunities = load_opportunities(args.opportunities)

        results = engine.match_all(opportunities, profile, as_of=args.as_of, max_workers=args.workers)
        results = engine.apply_result_policy(results, policy)
    except MatchingError as e:
        logger.error(str(e))
        return 1
    except ValueError as e:
        # pydantic rejects out-of-range CLI policy values
        logger.error(f"Invalid option: {e}")
        return 2

    if args.format == 'json':
        print(json.dumps([r.to_dict() for r in results], indent=2, default=str))
    else:
        titles = {str(o.get('id')): o.get('title', '') for o in opportunities if isinstance(o, dict)}
        print(format_text(results, titles))
    return 0


if __name__ == "__main__":
    sys.exit(main())
