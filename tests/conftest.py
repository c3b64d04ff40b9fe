"""Pytest configuration and shared fixtures for md2latex test suite.

This module provides shared fixtures, test configuration, and utilities
that are used across the entire test suite.
"""

import os

import pytest
from markdown_it.token import Token

from md2latex.parsers.markdown import MarkdownTokenizer

# Configure Hypothesis for property-based testing
from hypothesis import Phase, Verbosity, settings

settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=50)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "slow: Slow tests that may take several seconds")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")
    config.addinivalue_line("markers", "fuzzing: Property-based tests using Hypothesis")


@pytest.fixture
def tokenize():
    """Return a callable that tokenizes Markdown with default options."""
    tokenizer = MarkdownTokenizer()

    def _tokenize(markdown: str) -> list[Token]:
        return tokenizer.parse(markdown)

    return _tokenize


@pytest.fixture
def sample_markdown() -> str:
    """Provide a sample document exercising every block type.

    Returns
    -------
    str
        Markdown with headings, lists, a quote, code, a table and inline markup.

    """
    return """# Sample Document

This is a **sample document** with *italic text*, ~~removed~~ text and `inline code`.

## Section 2

Here is a list:

- Item 1
- Item 2

1. First item
2. Second item

> A quoted paragraph.

```python
def hello_world():
    print("Hello, World!")
```

---

| Name | Score |
|:-----|------:|
| Ada  | 95    |
| Bob  | 87    |

See [the site](https://example.com) and ![logo](images/logo.png).
"""


@pytest.fixture
def chinese_table_markdown() -> str:
    """Provide a three-column table whose last column holds long Chinese text."""
    long_text = "这是一个非常长的中文描述文本需要自动换行处理"
    return f"| 名称 | 数量 | 描述 |\n|:---|:---:|---:|\n| 苹果 | 10 | {long_text} |\n"
