"""Pytest configuration and shared fixtures for the htmlremark test suite."""

import logging
import os

import pytest
from hypothesis import Phase, Verbosity, settings

settings.register_profile("ci", max_examples=100, verbosity=Verbosity.verbose)
settings.register_profile("dev", max_examples=20)
settings.register_profile(
    "debug", max_examples=10, verbosity=Verbosity.verbose, phases=[Phase.explicit, Phase.reuse, Phase.generate]
)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "dev"))


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests - fast, isolated component tests")
    config.addinivalue_line("markers", "integration: Integration tests - component interaction tests")
    config.addinivalue_line("markers", "cli: Tests related to command-line interface")


@pytest.fixture
def sample_document() -> str:
    """A complete HTML page touching most element types."""
    return """<!DOCTYPE html>
<html>
<head><title>Release notes</title><script>track()</script></head>
<body>
<h1 id="notes">Release notes</h1>
<p>The <abbr title="Command Line Interface">CLI</abbr> now reads <em>stdin</em>
and <strong>URLs</strong>.<sup><a href="#fn:1" rel="footnote">1</a></sup></p>
<ul>
  <li>Faster tables</li>
  <li>Safer links</li>
</ul>
<pre><code class="language-python">print("hi")
</code></pre>
<table>
  <thead><tr><th>Name</th><th align="right">Count</th></tr></thead>
  <tbody><tr><td>parser</td><td align="right">12</td></tr></tbody>
</table>
<dl><dt>Preset</dt><dd>A named set of options.</dd></dl>
<div class="footnotes"><hr><ol>
<li id="fn:1"><p>Since version 1.0.&#160;<a href="#fnref:1" rev="footnote">&#8617;</a></p></li>
</ol></div>
</body>
</html>
"""


@pytest.fixture(autouse=True)
def reset_package_logger():
    """Undo handlers installed by CLI runs so later tests see default logging."""
    yield
    logger = logging.getLogger("htmlremark")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.addHandler(logging.NullHandler())
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
