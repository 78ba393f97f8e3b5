"""
Logging and configuration from environment variables or files.
"""

import os
import tempfile

from reqkit import ConfigFileLoader, HTTPClient, LoggingConfig, load_from_env


def json_logging():
    """Structured logs with correlation id; secrets are masked."""
    print("\n" + "=" * 60)
    print("JSON logging")
    print("=" * 60 + "\n")

    logging_config = LoggingConfig.create(level="DEBUG", format="json")

    with HTTPClient(base="https://httpbin.org", verbose=True, logging=logging_config) as client:
        client.get("/get", headers={"Authorization": "Bearer secret-token"}, query={"api_key": "k3y"})


def from_environment():
    """REQKIT_* variables and .env files."""
    print("\n" + "=" * 60)
    print("Environment configuration")
    print("=" * 60 + "\n")

    os.environ["REQKIT_BASE"] = "https://httpbin.org"
    os.environ["REQKIT_TIMEOUT"] = "10"
    os.environ["REQKIT_LOG_ENABLED"] = "true"
    os.environ["REQKIT_LOG_FORMAT"] = "colored"

    config = load_from_env(env_file=None)
    print(f"Options: {config.options.to_dict()}")

    with config.create_client() as client:
        client.get("/get")


def from_yaml_file():
    """YAML config file with an optional logging section."""
    print("\n" + "=" * 60)
    print("YAML configuration")
    print("=" * 60 + "\n")

    with tempfile.TemporaryDirectory() as tmpdir:
        path = os.path.join(tmpdir, "reqkit.yaml")
        with open(path, "w") as f:
            f.write(
                "reqkit:\n"
                "  base: https://httpbin.org\n"
                "  type: json\n"
                "  headers:\n"
                "    X-Api-Version: '2'\n"
                "  logging:\n"
                "    level: INFO\n"
                "    format: text\n"
            )

        with ConfigFileLoader.from_file(path).create_client() as client:
            print(client.post("/post", fields={"hello": "world"}).json()["json"])


if __name__ == "__main__":
    json_logging()
    from_environment()
    from_yaml_file()
