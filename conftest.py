"""Global pytest configuration."""

import os

# Keep tests on the deterministic stub clients regardless of the local .env
os.environ["OPENAI_API_KEY"] = ""
