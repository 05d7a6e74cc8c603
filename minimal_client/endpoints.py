#!/usr/bin/env python3
"""Endpoint name resolution from the ENDPOINTS environment variable."""

# 논리 엔드포인트 이름 -> 실제 ROS 2 서비스 이름 변환 유틸리티.
# 사용 예:
#   ENDPOINTS='{"endpoints":[{"endpoint_name":"REQUESTER_ENDPOINT","endpoint_key":"svc"}]}'
#   name = resolve_endpoint_name("REQUESTER_ENDPOINT", "add_two_ints", logger=node)
#   res = resolve_endpoint("REQUESTER_ENDPOINT", "add_two_ints", read_endpoints_env())
#   if not res.resolved:
#       print(res.status, res.detail)

from dataclasses import dataclass
from enum import Enum
import json
import os
import sys
from typing import Mapping, Optional

ENDPOINTS_ENV = "ENDPOINTS"

PREFIX = "ros2_"
MAX_TOTAL_LENGTH = 256
CHECKSUM_BASE = 31
CHECKSUM_MODULUS = 1_000_000_007

_ALLOWED = frozenset(b"abcdefghijklmnopqrstuvwxyzABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789_")

_UNSET = object()


class ResolutionStatus(Enum):
    """How a logical endpoint name was (or was not) resolved."""
    RESOLVED = "resolved"
    CONFIG_ABSENT = "config_absent"
    MALFORMED = "malformed"
    NOT_FOUND = "not_found"


@dataclass
class EndpointResolution:
    """Resolver result: the name to use plus why it was chosen."""
    name: str
    status: ResolutionStatus
    detail: str = ""

    @property
    def resolved(self) -> bool:
        return self.status is ResolutionStatus.RESOLVED


def _info(logger, message: str) -> None:
    if logger is not None:
        logger.get_logger().info(message)
    else:
        print(f"[Info] {message}", file=sys.stderr)


def _warn(logger, message: str) -> None:
    # node가 있으면 ROS 로거, 없으면 stderr
    if logger is not None:
        logger.get_logger().warn(message)
    else:
        print(f"[Warn] {message}", file=sys.stderr)


def _error(logger, message: str) -> None:
    if logger is not None:
        logger.get_logger().error(message)
    else:
        print(f"[Error] {message}", file=sys.stderr)


def checksum(raw: bytes) -> int:
    """Base-31 rolling hash of ``raw`` modulo 1,000,000,007."""
    total = 0
    for b in raw:
        total = (total * CHECKSUM_BASE + b) % CHECKSUM_MODULUS
    return total


def sanitize(raw: bytes) -> str:
    """Replace every byte outside [A-Za-z0-9_] with '_' (length preserved)."""
    return "".join(chr(b) if b in _ALLOWED else "_" for b in raw)


def sanitize_and_checksum(raw: str) -> str:
    """Turn an endpoint key into a valid, bounded ROS 2 name.

    The result is ``PREFIX + body + checksum`` where ``body`` is the
    sanitized key cut down so the whole string fits in
    ``MAX_TOTAL_LENGTH`` characters. Sanitizing and hashing both work on
    the UTF-8 bytes of ``raw``, so a non-ASCII character yields one ``_``
    per byte and the checksum matches other implementations of the same
    naming scheme.
    """
    data = raw.encode("utf-8")
    body = sanitize(data)
    suffix = str(checksum(data))

    max_body_length = max(0, MAX_TOTAL_LENGTH - len(PREFIX) - len(suffix))
    if len(body) > max_body_length:
        body = body[:max_body_length]

    return PREFIX + body + suffix


def read_endpoints_env(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Return the raw ENDPOINTS value, or None when it is not set."""
    if environ is None:
        environ = os.environ
    return environ.get(ENDPOINTS_ENV)


def _is_encodable(key: str) -> bool:
    # lone surrogates (e.g. "\ud800" escapes) have no UTF-8 form
    try:
        key.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def _find_endpoint_key(document, search_name: str) -> Optional[str]:
    if not isinstance(document, dict):
        return None
    endpoints = document.get("endpoints")
    if not isinstance(endpoints, list):
        return None
    for endpoint in endpoints:
        if not isinstance(endpoint, dict):
            continue
        if endpoint.get("endpoint_name") != search_name:
            continue
        key = endpoint.get("endpoint_key")
        if isinstance(key, str) and _is_encodable(key):
            return key
    return None


def resolve_endpoint(
    search_name: str,
    default_value: str,
    endpoints_json: Optional[str],
    logger=None,
) -> EndpointResolution:
    """Look up ``search_name`` in an ENDPOINTS document.

    ``endpoints_json`` is the raw variable text (None if unset). Any
    problem with it degrades to ``default_value``; the returned status
    says which one happened.
    """
    if endpoints_json is None:
        detail = f"Environment variable {ENDPOINTS_ENV} not set. Using default value."
        _warn(logger, detail)
        return EndpointResolution(default_value, ResolutionStatus.CONFIG_ABSENT, detail)

    try:
        document = json.loads(endpoints_json)
    except (ValueError, RecursionError) as exc:
        detail = f"Error parsing {ENDPOINTS_ENV}: {exc}. Using default value."
        _error(logger, detail)
        return EndpointResolution(default_value, ResolutionStatus.MALFORMED, detail)

    key = _find_endpoint_key(document, search_name)
    if key is None:
        detail = f"Endpoint {search_name} not found or missing endpoint_key. Using default value."
        _info(logger, detail)
        return EndpointResolution(default_value, ResolutionStatus.NOT_FOUND, detail)

    return EndpointResolution(sanitize_and_checksum(key), ResolutionStatus.RESOLVED)


def resolve_endpoint_name(
    search_name: str,
    default_value: str,
    endpoints_json=_UNSET,
    logger=None,
) -> str:
    """Resolved service name for ``search_name`` (falls back to ``default_value``).

    Reads the environment once when ``endpoints_json`` is not given.
    """
    if endpoints_json is _UNSET:
        endpoints_json = read_endpoints_env()
    return resolve_endpoint(search_name, default_value, endpoints_json, logger=logger).name
