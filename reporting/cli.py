from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Optional

from jyotish_core.errors import GunaMilanError
from logging_setup import configure_logging
from services.ashtakoota_services import AshtakootaScorer
from services.profile_store import YamlProfileStore

from .explain import explain_report

logger = logging.getLogger(__name__)


def main(argv: Optional[list[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Compute Ashtakoot Guna Milan between two stored profiles.")
    parser.add_argument("--profiles", type=Path, required=True, help="YAML file of profiles")
    parser.add_argument("--a", dest="profile_a", required=True, help="Profile id of the groom")
    parser.add_argument("--b", dest="profile_b", required=True, help="Profile id of the bride")
    parser.add_argument("--json", action="store_true", help="Print the report as JSON")
    parser.add_argument("--strict-tradition", action="store_true", help="Treat the 2/12 Bhakoot distance as inauspicious")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")

    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    scorer = AshtakootaScorer(YamlProfileStore(args.profiles), strict_tradition=args.strict_tradition)
    try:
        report = scorer.score(args.profile_a, args.profile_b)
    except GunaMilanError as exc:
        logger.error("%s: %s", exc.code, exc.message)
        return 2

    if args.json:
        print(json.dumps(report.to_dict(), indent=2))
    else:
        print(explain_report(report))
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
