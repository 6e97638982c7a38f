"""
Main entrypoint: run the daily check-in once over every account in the key file.

Env: PRIVATE_KEYS_PATH, SOLANA_RPC_URL, REWARDS_API_URL, SUMMARY_PATH,
TELEGRAM_BOT_TOKEN, TELEGRAM_CHAT_ID, LOG_LEVEL, LOG_FORMAT (see .env.example).

Installed console script: daily-checkin
"""

import sys

from daily_checkin.agent_worker.runner import main

if __name__ == "__main__":
    sys.exit(main())
