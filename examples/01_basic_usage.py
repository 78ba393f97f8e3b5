"""
Basic reqkit usage examples.

Demonstrates GET with query, form and JSON POST, HTTP error handling.
"""

from reqkit import ClientError, HTTPClient, HTTPError, RequestOptions


def basic_get_request():
    """Simple GET request."""
    print("\n=== Basic GET Request ===")

    with HTTPClient(base="https://httpbin.org") as client:
        response = client.get("/get", query={"q": "python", "page": 2})

        print(f"Status: {response.status_code} {response.reason}")
        print(f"URL seen by server: {response.json()['url']}")


def post_form_and_json():
    """Form-urlencoded and JSON bodies from the same fields."""
    print("\n=== POST form / JSON ===")

    with HTTPClient(base="https://httpbin.org") as client:
        fields = {"title": "My Post", "tags": ["a", "b"]}

        response = client.post("/post", fields=fields)
        print(f"Form: {response.json()['form']}")

        response = client.post("/post", fields={"title": "My Post"}, type="json")
        print(f"JSON: {response.json()['json']}")


def client_defaults():
    """Client options merged with per-call options."""
    print("\n=== Client defaults ===")

    defaults = RequestOptions(
        base="https://httpbin.org",
        headers={"X-Api-Version": "2"},
        timeout=10,
        user_agent="reqkit-example/1.0",
    )

    with HTTPClient(defaults) as client:
        # Заголовки объединяются, скаляры вызова побеждают
        response = client.get("/headers", headers={"X-Request": "1"}, timeout=5)
        print(f"Headers: {response.json()['headers']}")


def handling_errors():
    """4xx/5xx raise unless http_errors=False."""
    print("\n=== HTTP errors ===")

    with HTTPClient(base="https://httpbin.org") as client:
        try:
            client.get("/status/404")
        except ClientError as e:
            print(f"Caught {type(e).__name__}: {e} (url={e.url})")

        response = client.get("/status/503", http_errors=False)
        print(f"http_errors=False -> status {response.status_code}")

        try:
            client.get("/status/502")
        except HTTPError as e:
            print(f"Caught {type(e).__name__}: {e}")


if __name__ == "__main__":
    print("=" * 50)
    print("reqkit - Basic Usage Examples")
    print("=" * 50)

    basic_get_request()
    post_form_and_json()
    client_defaults()
    handling_errors()
