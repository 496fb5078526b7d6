#!/usr/bin/env python3
"""
ECB byte-at-a-time attack.

  demo    build a local oracle around a secret and recover it
  serve   run the vulnerable encryption service
  attack  recover the secret from a running service

Usage:
  python3 -m ecboracle demo [--prefix]
  python3 -m ecboracle serve [--host H] [--port P] [--prefix]
  python3 -m ecboracle attack --url http://localhost:1337 [--prefix]
"""

import argparse
import base64
import logging
import sys
import time

import requests

from .attack import recover_secret, recover_secret_with_prefix
from .errors import AttackError
from .oracle import QueryBudget, new_ecb_prefix_suffix_oracle, new_ecb_suffix_oracle
from .remote import RemoteOracle
from .server import HOST, PORT, create_app

DEFAULT_SECRET = base64.b64decode(
    "Um9sbGluJyBpbiBteSA1LjAKV2l0aCBteSByYWctdG9wIGRvd24gc28gbXkgaGFpciBjYW4gYmxvdwpU"
    "aGUgZ2lybGllcyBvbiBzdGFuZGJ5IHdhdmluZyBqdXN0IHRvIHNheSBoaQpEaWQgeW91IHN0b3A/IE5v"
    "LCBJIGp1c3QgZHJvdmUgYnkK"
)
MAX_QUERIES = 200000


def load_secret(args):
    if args.secret_b64:
        return base64.b64decode(args.secret_b64)
    return DEFAULT_SECRET


def make_oracle(secret, with_prefix):
    if with_prefix:
        return new_ecb_prefix_suffix_oracle(secret)
    return new_ecb_suffix_oracle(secret)


def run_attack(oracle, with_prefix, max_queries):
    oracle = QueryBudget(oracle, max_queries)
    print("[*] Recovering secret...")
    t0 = time.perf_counter()
    if with_prefix:
        secret = recover_secret_with_prefix(oracle)
    else:
        secret = recover_secret(oracle)
    elapsed = time.perf_counter() - t0

    print(f"[+] {len(secret)} bytes in {oracle.queries} queries ({elapsed:.2f}s)")
    print(f"\n[+] Recovered secret:\n{secret.decode(errors='replace')}")
    return secret


def cmd_demo(args):
    secret = load_secret(args)
    oracle = make_oracle(secret, args.prefix)
    print(f"[*] Local oracle: AES-128-ECB, {'random' if args.prefix else 'no'} prefix")
    recovered = run_attack(oracle, args.prefix, args.max_queries)
    print("Match ?", recovered == secret)
    return 0 if recovered == secret else 1


def cmd_serve(args):
    secret = load_secret(args)
    app = create_app(make_oracle(secret, args.prefix))
    print("-" * 60)
    print(f"Starting server on http://{args.host}:{args.port}")
    print("Endpoints: /api/encrypt, /status")
    app.run(host=args.host, port=args.port)
    return 0


def cmd_attack(args):
    print(f"[*] Target: {args.url}")
    run_attack(RemoteOracle(args.url), args.prefix, args.max_queries)
    return 0


def build_parser():
    parser = argparse.ArgumentParser(prog="ecboracle", description="ECB byte-at-a-time attack")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    sub = parser.add_subparsers(dest="command", required=True)

    demo = sub.add_parser("demo", help="attack a local oracle")
    demo.add_argument("--prefix", action="store_true", help="oracle prepends a random prefix")
    demo.add_argument("--secret-b64", help="secret to hide, base64")
    demo.add_argument("--max-queries", type=int, default=MAX_QUERIES)
    demo.set_defaults(func=cmd_demo)

    serve = sub.add_parser("serve", help="run the vulnerable service")
    serve.add_argument("--host", default=HOST)
    serve.add_argument("--port", type=int, default=PORT)
    serve.add_argument("--prefix", action="store_true", help="oracle prepends a random prefix")
    serve.add_argument("--secret-b64", help="secret to hide, base64")
    serve.set_defaults(func=cmd_serve)

    attack = sub.add_parser("attack", help="attack a running service")
    attack.add_argument("--url", default=f"http://{HOST}:{PORT}")
    attack.add_argument("--prefix", action="store_true", help="service prepends a prefix")
    attack.add_argument("--max-queries", type=int, default=MAX_QUERIES)
    attack.set_defaults(func=cmd_attack)

    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    try:
        return args.func(args)
    except (AttackError, requests.RequestException) as e:
        print(f"\n[-] Attack failed: {e}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
