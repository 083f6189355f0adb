"""Auxiliary constants not related to business logic or imported from environment variables."""
import os
import re

from dotenv import load_dotenv

load_dotenv()

CALLER_LOGGING_STACK_LEVEL = 2
"""Stack level that will make the logger inside an auxiliary function display the name
of function/method that called this helper function."""

EMAIL_PATTERN = re.compile(
    "(?:[a-z0-9!#$%&'*+/=?^_`{|}~-]+"
    "(?:\\.[a-z0-9!#$%&'*+/=?^_`{|}~-]+)*"
    '|"(?:[\\x01-\\x08\\x0b\\x0c\\x0e-\\x1f\\x21\\x23-\\x5b\\x5d-\\x7f]'
    '|\\\\[\\x01-\\x09\\x0b\\x0c\\x0e-\\x7f])*")'
    "@"
    "(?:(?:[a-z0-9](?:[a-z0-9-]*[a-z0-9])?\\.)+[a-z0-9]"
    "(?:[a-z0-9-]*[a-z0-9])?|\\[(?:(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?)\\.){3}"
    "(?:25[0-5]|2[0-4][0-9]|[01]?[0-9][0-9]?"
    "|[a-z0-9-]*[a-z0-9]:(?:[\\x01-\\x08\\x0b\\x0c\\x0e-\\x1f\\x21-\\x5a\\x53-\\x7f]"
    "|\\\\[\\x01-\\x09\\x0b\\x0c\\x0e-\\x7f])+)\\])",
    re.IGNORECASE,
)

LOGGING_LEVEL = os.environ.get("LOGGING_LEVEL", "INFO")

MIN_PASSWORD_LENGTH = 6

SUPABASE_URL = os.environ.get("SUPABASE_URL", "")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY", "")

YOUTUBE_API_KEY = os.environ.get("YOUTUBE_API_KEY", "")
