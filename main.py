"""
Student Portal Core — Entry Point.

Single entry point: `python main.py` starts the Mini App API together with
the Telegram bot and its reminder jobs.
"""

import logging

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

from src.api.app import main

if __name__ == "__main__":
    main()
