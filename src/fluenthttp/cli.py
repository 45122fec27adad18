import argparse
import json
import sys

from fluenthttp.core.errors import FluentHTTPError
from fluenthttp.http.client.client import Client
from fluenthttp.http.client.request import DEFAULT_TIMEOUT, ContentType, Cookie, Method


def _key_value(sep):
    def parse(raw: str):
        key, found, value = raw.partition(sep)
        if not found or not key.strip():
            raise argparse.ArgumentTypeError(f"expected KEY{sep}VALUE, got {raw!r}")
        return key.strip(), value.strip() if sep == ":" else value
    return parse


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="fluenthttp", description="Send one HTTP request.")
    parser.add_argument("method", type=str.upper, choices=[m.value for m in Method],
                        help="HTTP method")
    parser.add_argument("url", help="Target URL")
    parser.add_argument("-p", "--param", action="append", default=[], type=_key_value("="),
                        metavar="KEY=VALUE", help="Query or body parameter (repeatable)")
    parser.add_argument("-H", "--header", action="append", default=[], type=_key_value(":"),
                        metavar="NAME:VALUE", help="Request header (repeatable)")
    parser.add_argument("-c", "--cookie", action="append", default=[], type=_key_value("="),
                        metavar="NAME=VALUE", help="Cookie (repeatable, sent in order)")
    parser.add_argument("--form", action="store_true",
                        help="Send body params as application/x-www-form-urlencoded")
    parser.add_argument("--timeout", type=float, default=DEFAULT_TIMEOUT.total_seconds(),
                        help="Timeout in seconds")
    parser.add_argument("--debug", action="store_true", help="Debug logging")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    if args.debug:
        from fluenthttp import configure_logging
        configure_logging('DEBUG')

    client = Client(args.url).set_timeout(args.timeout)
    if args.form:
        client.set_content_type(ContentType.FORM)
    for key, value in args.header:
        client.add_header(key, value)
    for key, value in args.param:
        client.add_param(key, value)
    if args.cookie:
        client.set_cookies(Cookie(name, value) for name, value in args.cookie)

    verb = getattr(client, Method(args.method).value.lower())
    try:
        resp = verb()
    except FluentHTTPError as exc:
        print(f"fluenthttp: {exc}", file=sys.stderr)
        return 1

    out = {"status": resp.status, "headers": resp.headers, "body": resp.text}
    print(json.dumps(out, ensure_ascii=False), flush=True)
    return 0


if __name__ == "__main__":
    sys.exit(main())
