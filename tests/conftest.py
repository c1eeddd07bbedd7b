"""Pytest configuration and fixtures."""

import pytest

from convo_highlights.config import Settings


@pytest.fixture
def settings() -> Settings:
    """Settings isolated from the environment and any .env file."""
    return Settings(_env_file=None)


@pytest.fixture
def closure_transcript() -> str:
    """Minimal generic transcript with one question and one action item."""
    return (
        "User: What is a closure?\n"
        "Assistant: A closure is a function bundled with its lexical scope. TODO: read more."
    )


@pytest.fixture
def chatgpt_transcript() -> str:
    """ChatGPT export with code, a link and a follow-up question."""
    return """User: How do I read a JSON file in Python?
ChatGPT: Use the json module from the standard library:
```python
import json

with open("data.json") as f:
    data = json.load(f)
```
See https://docs.python.org/3/library/json.html for details.
User: Can I also write the result back to disk afterwards?
Assistant: Yes, use json.dump with an open file handle.
- TODO: add error handling for missing files
"""


@pytest.fixture
def claude_transcript() -> str:
    """Claude export using Human/Claude prefixes."""
    return """Human: Help me plan the backend deployment for our API.
Claude: Sure. First containerize the server with Docker.
NEXT STEP: write the Dockerfile
Human: Thanks!
"""


@pytest.fixture
def custom_transcript() -> str:
    """Generic transcript with bullets and alias prefixes."""
    return """- Me: Is there a good tutorial for learning SQL joins?
* Bot: Yes, start with inner joins and then move to outer joins.
Plan: practice on a sample database
System: keep answers short
"""
