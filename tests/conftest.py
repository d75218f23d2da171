import json

import pytest
import requests


class FakeResponse:
    def __init__(self, text="", status_code=200, payload=None):
        self.text = text if payload is None else json.dumps(payload)
        self.status_code = status_code
        self._payload = payload

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")

    def json(self):
        if self._payload is not None:
            return self._payload
        return json.loads(self.text)


class FakeSession:
    """Records requests and answers from a URL-prefix routing table.

    Route values may be a FakeResponse, an exception instance to raise, or a
    list of either, consumed one per call.
    """

    def __init__(self, routes=None):
        self.routes = dict(routes or {})
        self.headers = {}
        self.calls = []

    def _answer(self, method, url, **kwargs):
        self.calls.append({"method": method, "url": url, **kwargs})
        for prefix, answer in self.routes.items():
            if url.startswith(prefix):
                if isinstance(answer, list):
                    answer = answer.pop(0)
                if isinstance(answer, Exception):
                    raise answer
                return answer
        raise requests.ConnectionError(f"no route for {url}")

    def get(self, url, **kwargs):
        return self._answer("GET", url, **kwargs)

    def put(self, url, **kwargs):
        return self._answer("PUT", url, **kwargs)


@pytest.fixture
def fake_session():
    def factory(routes=None):
        return FakeSession(routes)

    return factory


RSS_PAYLOAD = """<?xml version="1.0"?>
<rss version="2.0" xmlns:media="http://search.yahoo.com/mrss/">
  <channel>
    <title>Example</title>
    <item>
      <title><![CDATA[GPU prices fall again]]></title>
      <link>https://example.com/gpu</link>
      <description>&lt;p&gt;Cards are &lt;b&gt;cheaper&lt;/b&gt; this week.&lt;/p&gt;</description>
      <pubDate>Wed, 02 Oct 2024 10:00:00 +0000</pubDate>
      <category>Hardware</category>
      <media:thumbnail url="https://cdn.example.com/gpu.jpg" />
    </item>
    <item>
      <title>Phone security update</title>
      <link>https://example.com/phone</link>
      <description>Patch now.</description>
      <pubDate>Thu, 03 Oct 2024 08:30:00 +0000</pubDate>
    </item>
  </channel>
</rss>
"""


@pytest.fixture
def rss_payload():
    return RSS_PAYLOAD
