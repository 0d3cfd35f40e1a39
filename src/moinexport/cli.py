"""CLI for moinexport - export Etherpad pads as MoinMoin markup."""

import argparse
import asyncio
import logging
import platform
import sys
from pathlib import Path
from typing import Any

from . import __version__
from .runtime import build_runtime
from .service import convert


def version_text() -> str:
    return (
        f"moinexport {__version__}\n"
        f"python {platform.python_version()}\n"
        f"platform {platform.platform()}"
    )


def cmd_export(args: argparse.Namespace, rt: Any) -> int:
    """Convert a pad and print or write the markup."""
    markup = asyncio.run(convert(rt.store, args.pad, args.rev, rt.options))
    
    if args.output:
        out = Path(args.output)
        out.parent.mkdir(parents=True, exist_ok=True)
        out.write_text(markup, encoding="utf-8")
        if not args.quiet:
            print(f"Exported {args.pad} to {out}")
    else:
        print(markup, end="")
    return 0


def cmd_ls(args: argparse.Namespace, rt: Any) -> int:
    """List pads in the store."""
    for pad_id in rt.store.list_pads():
        print(pad_id)
    return 0


def cmd_serve(args: argparse.Namespace, rt: Any) -> int:
    """Start the export HTTP server."""
    try:
        import uvicorn

        from .api.app import create_app, generate_token
    except ImportError as e:
        print(
            "Error: API dependencies not installed. "
            "Install with: pip install moinexport[api]",
            file=sys.stderr
        )
        print(f"Details: {e}", file=sys.stderr)
        return 1
    
    # Determine token
    token_arg = getattr(args, 'token', 'none')
    token = None
    
    if token_arg == 'auto':
        token = generate_token()
        print(f"Generated bearer token: {token}")
        print(f"Use in requests: Authorization: Bearer {token}")
    elif token_arg == 'none':
        token = None
    else:
        token = token_arg
    
    app = create_app(rt, token=token, enable_cors=getattr(args, 'cors', False))
    
    host = args.host or rt.config.server.host
    port = args.port or rt.config.server.port
    
    print(f"Starting server on http://{host}:{port}")
    print(f"Export URL: http://{host}:{port}/p/<pad>/export/moinmoin")
    
    uvicorn.run(app, host=host, port=port, log_level="info")
    
    return 0


def main() -> None:
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        prog="moinexport", description="Export Etherpad pads as MoinMoin markup"
    )
    parser.add_argument(
        "--version", action="version", version=version_text()
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config file (default: search cwd/moinexport.toml, store/moinexport.toml)",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Path to pad directory (overrides config)",
    )
    parser.add_argument(
        "-q", "--quiet", action="store_true", help="Minimize output"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    
    subparsers = parser.add_subparsers(dest="cmd", required=True)
    
    # export command
    parser_export = subparsers.add_parser("export", help="Export a pad as MoinMoin markup")
    parser_export.add_argument("pad", help="Pad ID")
    parser_export.add_argument(
        "--rev", default=None, help="Revision number (default: latest)"
    )
    parser_export.add_argument(
        "-o", "--output", default=None, help="Write to file instead of stdout"
    )
    
    # ls command
    subparsers.add_parser("ls", help="List pads in the store")
    
    # serve command
    parser_serve = subparsers.add_parser("serve", help="Start export HTTP server")
    parser_serve.add_argument(
        "--host", default=None,
        help="Host to bind to (default: from config, 127.0.0.1)"
    )
    parser_serve.add_argument(
        "--port", type=int, default=None,
        help="Port to bind to (default: from config, 9001)"
    )
    parser_serve.add_argument(
        "--token", default="none",
        help="Bearer token (auto|<string>|none, default: none)"
    )
    parser_serve.add_argument(
        "--cors", action="store_true",
        help="Enable CORS (default: false)"
    )
    
    args = parser.parse_args()
    
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )
    
    rt = build_runtime(store_path=args.store, config_path=args.config)
    
    handlers = {
        "export": cmd_export,
        "ls": cmd_ls,
        "serve": cmd_serve,
    }
    
    handler = handlers.get(args.cmd)
    if handler:
        try:
            exit_code = handler(args, rt)
            sys.exit(exit_code)
        except Exception as e:
            print(f"Error: {e}", file=sys.stderr)
            sys.exit(1)
    else:
        print(f"Unknown command: {args.cmd}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
