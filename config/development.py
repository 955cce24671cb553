import os

from config.base import db_config_from_env, env_flag

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = db_config_from_env()

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Apply database/schema.sql on startup (CREATE TABLE IF NOT EXISTS, safe to repeat)
AUTO_INIT_DB = env_flag("AUTO_INIT_DB", "1")
# Also insert the demo HR/manager/employee accounts when missing
AUTO_SEED_DB = env_flag("AUTO_SEED_DB", "0")
