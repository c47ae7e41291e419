from pathlib import Path

DATABASE = f"sqlite:///{Path.home()}/.local/share/athenai/athenai.db"
SQLITE_FOREIGN_KEY_SUPPORT = True
APP_ENV = "prod"
LOG_LEVEL = "INFO"
PORT = 8080
