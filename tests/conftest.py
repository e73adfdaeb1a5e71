import os

# Settings are read when src.main is imported; the default provider needs a key
os.environ.setdefault("GEMINI_API_KEY", "test-key")
