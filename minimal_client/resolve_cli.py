#!/usr/bin/env python3
"""Print the service name a logical endpoint resolves to."""

# 배포 환경에서 ENDPOINTS 설정 확인용.
# 사용 예:
#   ros2 run minimal_client resolve_endpoint REQUESTER_ENDPOINT --verbose

import argparse
import sys
from typing import List, Optional

from minimal_client.endpoints import read_endpoints_env, resolve_endpoint

EXIT_FALLBACK = 2


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Resolve a logical endpoint name from ENDPOINTS")
    parser.add_argument("name", nargs="?", default="REQUESTER_ENDPOINT")
    parser.add_argument("--default", default="add_two_ints", help="fallback service name")
    parser.add_argument("--verbose", "-v", action="store_true")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    res = resolve_endpoint(args.name, args.default, read_endpoints_env())
    if args.verbose:
        print(f"{args.name}: {res.name} [{res.status.value}]")
    else:
        print(res.name)
    return 0 if res.resolved else EXIT_FALLBACK


def run() -> None:
    sys.exit(main())


if __name__ == "__main__":
    run()
