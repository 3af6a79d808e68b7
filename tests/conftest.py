import os

# Cheap password hashing and no local.env lookups while testing
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("ENV_FILE", os.devnull)
os.environ.setdefault("TIPS_PROVIDER", "heuristic")
