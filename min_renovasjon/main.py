import argparse
import asyncio
import json
import logging

from .app_factory import create_facade, initialize_app
from .scheduler import run_scheduler, start_scheduler_thread

logger = logging.getLogger(__name__)


def main():
    initialize_app()
    parser = argparse.ArgumentParser(description="Min Renovasjon pickup calendar.")
    parser.add_argument(
        "command",
        choices=["refresh", "scheduler", "widget"],
        help="The command to execute.",
    )
    args = parser.parse_args()

    facade = create_facade()

    if args.command == "refresh":
        facade.refresh()
        print(json.dumps(facade.get_widget_data(), ensure_ascii=False, indent=2))
    elif args.command == "scheduler":
        logger.info("Starting scheduler...")
        asyncio.run(run_scheduler(facade))
    elif args.command == "widget":
        from widget.app import run_widget
        logger.info("Starting widget endpoint with the daily refresh...")
        start_scheduler_thread(facade)
        run_widget(facade)


if __name__ == "__main__":
    main()
