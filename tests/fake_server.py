"""In-memory stand-in for an Apache server, used by the controller tests."""

import os
import sys
import threading

sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from services.transport import NetworkError


def index_page(path, links):
    """Build an Apache 2.4 style "Index of" page linking to `links`."""
    rows = "\n".join(
        f'<tr><td valign="top"><img src="/icons/image2.gif" alt="[IMG]"></td>'
        f'<td><a href="{href}">{href}</a></td>'
        f'<td align="right">2021-03-04 10:11  </td><td align="right"> 12K</td></tr>'
        for href in links
    )
    return f"""<!DOCTYPE HTML PUBLIC "-//W3C//DTD HTML 3.2 Final//EN">
<html>
 <head>
  <title>Index of {path}</title>
 </head>
 <body>
<h1>Index of {path}</h1>
  <table>
   <tr><th valign="top"><img src="/icons/blank.gif" alt="[ICO]"></th><th><a href="?C=N;O=D">Name</a></th><th><a href="?C=M;O=A">Last modified</a></th><th><a href="?C=S;O=A">Size</a></th></tr>
   <tr><th colspan="4"><hr></th></tr>
<tr><td valign="top"><img src="/icons/back.gif" alt="[PARENTDIR]"></td><td><a href="{os.path.dirname(path.rstrip('/')).rstrip('/') + '/'}">Parent Directory</a></td><td>&nbsp;</td><td align="right">  - </td></tr>
{rows}
   <tr><th colspan="4"><hr></th></tr>
</table>
<address>Apache/2.4.41 (Ubuntu) Server at localhost Port 80</address>
</body></html>
"""


class FakeServer:
    """
    Serves canned index pages by URL.

    Unknown URLs answer like a 404. Pages can be held back with `hold()`
    so tests can interleave requests with a fetch in flight.
    """

    def __init__(self, pages=None):
        self.pages = dict(pages or {})
        self.requests = []
        self._gates = {}

    def add(self, url, links):
        path = "/" + url.split("://", 1)[-1].split("/", 1)[-1]
        self.pages[url] = index_page(path, links)

    def hold(self, url):
        gate = threading.Event()
        self._gates[url] = gate
        return gate

    def __call__(self, url):
        self.requests.append(url)
        gate = self._gates.get(url)
        if gate is not None:
            gate.wait(5)
        if url not in self.pages:
            raise NetworkError(url, f"HTTP 404 for {url}", status_code=404)
        return self.pages[url]


def mock_server():
    """The galleries used throughout the controller tests."""
    server = FakeServer()
    server.add(
        "http://localhost/mock-images/",
        ["image1.jpg", "image2.png", "notes.txt"],
    )
    server.add("http://localhost/mock-no-images/", ["readme.txt", "data.csv"])
    server.add(
        "http://localhost/mock-subdirs/",
        ["subdir1/", "subdir2/", "cover.jpg"],
    )
    server.add(
        "http://localhost/mock-subdirs/subdir1/",
        ["a1.jpg", "a2.jpg"],
    )
    server.add(
        "http://localhost/mock-subdirs/subdir2/",
        ["b1.png", "b2.png", "b3.png"],
    )
    return server
