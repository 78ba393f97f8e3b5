"""
Multipart uploads and streaming downloads.
"""

import os
import tempfile

from reqkit import FileNotFoundError, HTTPClient, HTTPClientException


def upload_file():
    """"@path" field values and HTTPClient.file() become multipart parts."""
    print("\n=== Upload ===")

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "report.csv")
        with open(path, "w") as f:
            f.write("a,b\n1,2\n")

        with HTTPClient(base="https://httpbin.org") as client:
            response = client.post("/post", fields={"title": "Q1", "report": f"@{path}"})
            print(f"Files: {list(response.json()['files'])}")

            response = client.post("/post", fields={"report": HTTPClient.file(path)})
            print(f"Form: {response.json()['form']}")

            try:
                client.post("/post", fields={"report": "@/nonexistent/report.csv"})
            except FileNotFoundError as e:
                print(f"Missing upload: {e}")


def download_file():
    """Body streamed to disk, never kept in memory."""
    print("\n=== Download ===")

    with tempfile.TemporaryDirectory() as tmpdir:
        target = os.path.join(tmpdir, "random.bin")

        with HTTPClient(base="https://httpbin.org") as client:
            response = client.download("/bytes/10000", target)
            print(f"Status: {response.status_code}, saved {os.path.getsize(target)} bytes")

            try:
                client.download("/status/404", target)
            except HTTPClientException as e:
                print(f"{type(e).__name__}: {e}; file removed: {not os.path.exists(target)}")


if __name__ == "__main__":
    upload_file()
    download_file()
