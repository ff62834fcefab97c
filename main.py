"""
Crypto Trend Bot Entry Point

Usage:
    python main.py                      # start + run on the cron schedule
    python main.py --status             # print bot status
    python main.py --force-post         # run one cycle now and publish
    python main.py --force-post --dry-run
    python main.py --report             # analyze once, print the report (no post)
    python main.py --explain defi       # educational blurb for a topic
"""
import argparse
import json
import sys

from config.settings import settings
from agent.core.logger import logger


def build_bot():
    from core.llm import create_llm_client
    from agent.bot import CryptoTrendBot
    from agent.platforms.twitter.adapter import TwitterAdapter

    return CryptoTrendBot(TwitterAdapter(), create_llm_client())


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Crypto Twitter trends bot")
    group = parser.add_mutually_exclusive_group()
    group.add_argument("--status", action="store_true", help="print bot status as JSON")
    group.add_argument("--force-post", action="store_true", help="run one analysis cycle and post now")
    group.add_argument("--report", action="store_true", help="run one analysis and print the report")
    group.add_argument("--explain", metavar="TOPIC", help="print educational content for a topic")
    parser.add_argument("--dry-run", action="store_true", help="with --force-post: compose but do not publish")
    return parser.parse_args(argv)


def _print_json(label: str, payload):
    print(f"{label}: {json.dumps(payload, indent=2, ensure_ascii=False)}")


def run(bot):
    """Standalone 모드: 초기 사이클 후 cron 스케줄로 블로킹 실행"""
    from agent.scheduler import BotScheduler

    scheduler = BotScheduler(bot)
    logger.info("============ BOT START ============")
    logger.info(f"Bot Username: {settings.BOT_USERNAME}")
    logger.info(f"Posting Schedule: {settings.POSTING_SCHEDULE}")
    logger.info(f"Max Posts/Day: {settings.TWEET_RATE_LIMIT}")
    logger.info(f"Analysis Window: {settings.ANALYSIS_TIME_WINDOW}h")

    try:
        bot.start()
        scheduler.start()
    except (KeyboardInterrupt, SystemExit):
        logger.info("[STOP] Shutdown via KeyboardInterrupt")
    finally:
        bot.stop()
        scheduler.stop()


def main(argv=None) -> int:
    args = parse_args(argv)

    if args.status:
        from agent.scheduler import BotScheduler

        bot = build_bot()
        BotScheduler(bot)  # attaches itself for next_post_time
        _print_json("Bot Status", bot.get_status())
        return 0

    missing = settings.validate()
    if missing:
        logger.critical(f"[CONFIG] Missing required settings: {', '.join(missing)}")
        logger.critical("[CONFIG] Copy .env.example to .env and fill in the required values")
        return 1

    bot = build_bot()

    if args.force_post:
        content = bot.force_post(dry_run=args.dry_run)
        if args.dry_run and content:
            print(content)
        return 0 if content else 1

    if args.report:
        bot.run_cycle(publish=False)
        _print_json("Analysis Report", bot.get_analysis_report())
        return 0

    if args.explain:
        print(bot.composer.educational_content(args.explain))
        return 0

    try:
        run(bot)
    except Exception as e:
        logger.critical(f"[FATAL] Crash: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
