# Root conftest.py - loads .env before test collection so PROPCHECK_*
# settings are visible when configuration is read.
from dotenv import load_dotenv
load_dotenv()

# Fixtures live in tests/conftest.py and are discovered automatically.
