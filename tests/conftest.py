import os

# The app builds its engine from the environment at import time; keep tests off MySQL.
os.environ.setdefault("TODO_DATABASE_URL", "sqlite://")
