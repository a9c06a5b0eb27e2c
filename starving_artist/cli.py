"""
Starving Artist CLI - Command-line interface for the engine.

Usage:
    starving-artist simulate [--games N] [--players N] [--seed N] [--out FILE]
    starving-artist serve [--host HOST] [--port PORT]
"""

import argparse
import json
import logging
import sys


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Starving Artist - career progression game engine",
        prog="starving-artist",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser("simulate", help="Run bot games and summarize them")
    simulate_parser.add_argument("--games", type=int, default=50, help="Number of games")
    simulate_parser.add_argument("--players", type=int, default=2, help="Players per game")
    simulate_parser.add_argument("--seed", type=int, default=1, help="Seed of the first game")
    simulate_parser.add_argument("--policy", default="heuristic",
                                 help="Bot policy: heuristic or random")
    simulate_parser.add_argument("--art-path", action="append", dest="art_paths",
                                 help="Art path per seat (repeatable)")
    simulate_parser.add_argument("--max-turns", type=int, help="Override the turn limit")
    simulate_parser.add_argument("--out", "-o", help="Write the JSON summary to a file")

    # Serve command
    serve_parser = subparsers.add_parser("serve", help="Run the HTTP API")
    serve_parser.add_argument("--host", default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", type=int, default=8000, help="Bind port")
    serve_parser.add_argument("--reload", action="store_true", help="Reload on code changes")

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.command == "simulate":
        cmd_simulate(args)
    elif args.command == "serve":
        cmd_serve(args)
    else:
        parser.print_help()
        sys.exit(1)


def cmd_simulate(args):
    """Run a batch of seeded bot games."""
    from .session import simulate_games

    if args.games < 1 or args.players < 1:
        print("Error: --games and --players must be at least 1")
        sys.exit(1)

    config = None
    if args.max_turns is not None:
        config = {"rules": {"max_turns": args.max_turns}}

    try:
        summary = simulate_games(
            games=args.games,
            players=args.players,
            seed_start=args.seed,
            policy=args.policy,
            art_paths=args.art_paths,
            config=config,
        )
    except ValueError as e:
        print(f"Error: {e}")
        sys.exit(1)

    text = json.dumps(summary, indent=2)
    if args.out:
        with open(args.out, "w", encoding="utf-8") as f:
            f.write(text)
        print(f"Wrote {args.out}")
    else:
        print(text)


def cmd_serve(args):
    """Run the API under uvicorn."""
    import uvicorn

    uvicorn.run(
        "starving_artist.api.app:app",
        host=args.host,
        port=args.port,
        reload=args.reload,
    )


if __name__ == "__main__":
    main()
