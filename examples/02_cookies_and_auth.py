"""
Cookies, authentication and proxies.
"""

import os
import tempfile

from reqkit import AuthConfig, HTTPClient


def memory_cookie_jar():
    """Response cookies are sent back on the next request."""
    print("\n=== In-memory cookie jar ===")

    with HTTPClient(base="https://httpbin.org") as client:
        client.get("/cookies/set", query={"session": "abc123"})
        print(f"Jar: {client.cookies()}")

        response = client.get("/cookies", cookies={"lang": "en"})
        print(f"Server saw: {response.json()['cookies']}")


def cookie_file():
    """Cookies persisted in a Netscape cookie file between clients."""
    print("\n=== Cookie file ===")

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "cookies.txt")

        with HTTPClient(base="https://httpbin.org", cookie_jar=path) as client:
            client.get("/cookies/set", query={"visit": "1"})

        with HTTPClient(base="https://httpbin.org", cookie_jar=path) as client:
            print(f"Second client: {client.get('/cookies').json()['cookies']}")


def authentication():
    """basic, digest and "any" (answer the server's challenge)."""
    print("\n=== Authentication ===")

    with HTTPClient(base="https://httpbin.org") as client:
        response = client.get("/basic-auth/alice/secret", auth=("alice", "secret"))
        print(f"basic: {response.status_code}")

        response = client.get("/digest-auth/auth/alice/secret", auth=AuthConfig("alice", "secret", "digest"))
        print(f"digest: {response.status_code}")

        response = client.get("/basic-auth/alice/secret", auth={"username": "alice", "password": "secret", "type": "any"})
        print(f"any: {response.status_code}")


def proxy_settings():
    """Proxy with credentials (not sent anywhere here)."""
    print("\n=== Proxy ===")

    client = HTTPClient(proxy={"proxy": "proxy.local:3128", "username": "bob", "password": "p@ss"})
    print(f"Proxy: {client.defaults.proxy}")
    client.close()


if __name__ == "__main__":
    memory_cookie_jar()
    cookie_file()
    authentication()
    proxy_settings()
