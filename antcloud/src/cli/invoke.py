#!/usr/bin/env python3
"""
CLI tool to invoke a gateway method.

Usage:
    python -m antcloud.src.cli.invoke \
        --method antcloud.demo.gateway.check.echo \
        --version 1.0 \
        --param input_string="hello world" \
        --param input_demo.some_list.1=hello
"""

import argparse
import json
import logging
import sys
from typing import Any, Dict, List, Optional

from antcloud.src.client import AntCloudClient
from antcloud.src.config import ClientConfig
from antcloud.src.errors import GatewayError
from antcloud.src.utils.form_params import deserialize


def parse_params(pairs: List[str]) -> Dict[str, Any]:
    """Turn key=value pairs with dotted keys into a nested request."""
    flat = {}
    for pair in pairs:
        key, sep, value = pair.partition("=")
        if not sep or not key:
            raise ValueError(f"Expected key=value, got {pair!r}")
        flat[key] = value
    return deserialize(flat)


def build_request(args: argparse.Namespace) -> Dict[str, Any]:
    request: Dict[str, Any] = {}

    if args.params_json:
        with open(args.params_json, 'r') as f:
            request.update(json.load(f))

    request.update(parse_params(args.param))
    request["method"] = args.method
    request["version"] = args.version
    return request


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Invoke a gateway method")
    parser.add_argument('--method', required=True, help="Gateway method name")
    parser.add_argument('--version', required=True, help="Method version")
    parser.add_argument('--param', action='append', default=[], help="Request parameter as key=value (repeatable)")
    parser.add_argument('--params-json', help="JSON file with request parameters")
    parser.add_argument('--endpoint', help="Gateway URL (default: $ANTCLOUD_ENDPOINT)")
    parser.add_argument('--access-key', help="Access key (default: $ANTCLOUD_ACCESS_KEY)")
    parser.add_argument('--access-secret', help="Access secret (default: $ANTCLOUD_ACCESS_SECRET)")
    parser.add_argument('--no-check-sign', action='store_true', help="Skip response signature verification")
    parser.add_argument('--raw', action='store_true', help="Print the raw response body")
    parser.add_argument('--verbose', '-v', action='store_true', help="Enable debug logging")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s"
    )

    try:
        config = ClientConfig.from_env(
            endpoint=args.endpoint,
            access_key=args.access_key,
            access_secret=args.access_secret,
        )
        request = build_request(args)
    except (ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    with AntCloudClient(config) as client:
        try:
            result = client.execute(
                request,
                check_resp_sign=False if args.no_check_sign else None,
                raw_body=args.raw,
            )
        except GatewayError as e:
            print(f"Error [{e.code}]: {e.message}", file=sys.stderr)
            return 1

    if args.raw:
        print(result)
    else:
        print(json.dumps(result, indent=2, ensure_ascii=False))
    return 0


if __name__ == '__main__':
    sys.exit(main())
