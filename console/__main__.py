import argparse
import asyncio
import logging

from badugi.models import Difficulty, GameSettings

from .session import TableSession


def main() -> None:
    parser = argparse.ArgumentParser(description="Heads-up badugi against the computer")
    parser.add_argument("--chips", type=int, default=1_000, help="Starting chips per player")
    parser.add_argument("--sb", type=int, default=10)
    parser.add_argument("--bb", type=int, default=20, help="Minimum opening raise")
    parser.add_argument("--max-exchanges", type=int, default=3)
    parser.add_argument("--difficulty", choices=[d.value for d in Difficulty], default=Difficulty.MEDIUM.value)
    parser.add_argument("--hands", type=int, default=1)
    parser.add_argument("--seed", type=int, default=None, help="Seed shuffles and computer decisions")
    parser.add_argument("--no-delay", action="store_true", help="Apply computer moves immediately")
    parser.add_argument("--autoplay", action="store_true", help="Let the computer play both seats")
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper())

    settings = GameSettings(
        initial_chips=args.chips,
        small_blind=args.sb,
        big_blind=args.bb,
        max_exchanges=args.max_exchanges,
        ai_difficulty=Difficulty(args.difficulty),
    )
    session = TableSession(
        settings,
        seed=args.seed,
        delay_scale=0.0 if args.no_delay else 1.0,
        autoplay=args.autoplay,
    )
    asyncio.run(session.run(hands=args.hands))


if __name__ == "__main__":
    main()
