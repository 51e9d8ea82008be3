"""Global pytest configuration."""

import os

# Keep tests off disk and away from the real provider before any imports
os.environ["STORAGE_BACKEND"] = "memory"
os.environ["OPENAI_API_KEY"] = ""
