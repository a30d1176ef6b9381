from __future__ import annotations

import os

from dotenv import find_dotenv, load_dotenv

# variables already set in the environment win over the .env file
ENV_FILE: str = os.environ.get("HOSTSTAT_ENV_FILE") or find_dotenv(usecwd=True)
if ENV_FILE:
    load_dotenv(ENV_FILE)

APP_NAME: str = "HostStat"

SAMPLE_CRON_SECOND: str = "*/30"

DB_URL: str | None = os.environ.get("DB_URL") or None
DB_DRIVER: str = os.environ.get("DB_DRIVER", "mysql+pymysql")
DB_HOST: str = os.environ.get("DB_HOST", "localhost")
DB_USER: str | None = os.environ.get("DB_USER")
DB_PASSWORD: str | None = os.environ.get("DB_PASSWORD")
DB_DATABASE: str | None = os.environ.get("DB_DATABASE")
DB_POOL_SIZE: int = int(os.environ.get("DB_POOL_SIZE", "10"))

NETWORK_INTERFACE: str = os.environ.get("NETWORK_INTERFACE", "eth0")
DISK_MOUNTPOINT: str = os.environ.get("DISK_MOUNTPOINT", "/")

PING_TARGETS: dict[str, str] = {
    "google": "8.8.8.8",
    "cloudflare": "1.1.1.1",
    "discord": "discord.com",
}
PING_TIMEOUT_MS: int = int(os.environ.get("PING_TIMEOUT_MS", "2000"))

LOG_LEVEL: str = os.environ.get("LOG_LEVEL", "INFO")
