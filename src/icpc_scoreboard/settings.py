import os

import environ


env = environ.Env()

_ENV_FILE = os.path.join(os.getcwd(), ".env")
if os.path.exists(_ENV_FILE):
    environ.Env.read_env(_ENV_FILE)

LOG_LEVEL = env.str("LOG_LEVEL", default="INFO")

USE_CLOUD_LOGGING = env.bool("USE_CLOUD_LOGGING", default=False)

# Rank change notifications are only sent when both are set
TELEGRAM_BOT_TOKEN = env.str("TELEGRAM_BOT_TOKEN", default="")
TELEGRAM_CHAT_ID = env.int("TELEGRAM_CHAT_ID", default=0)
