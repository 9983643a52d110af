from __future__ import annotations

import os
import sys
from pprint import pprint

import requests


API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")


def _post(path: str, payload: dict):
    response = requests.post(f"{API_BASE_URL}{path}", json=payload, timeout=120)
    response.raise_for_status()
    return response.json()


def main() -> None:
    print(f"Using API: {API_BASE_URL}")

    try:
        health = requests.get(f"{API_BASE_URL}/health", timeout=15)
        health.raise_for_status()
        print("Health:", health.json())

        ask = _post(
            "/ask",
            {
                "question": "How many days of paid leave do employees get?",
                "history": [],
            },
        )
        print("\nAnswer:")
        print(ask["answer"])
        print("\nEvents:")
        pprint([event["event"] for event in ask["events"]])

        empty = _post("/ask", {"question": "   "})
        print("\nEmpty question events:")
        pprint(empty["events"])

    except Exception as exc:
        print(f"Smoke test failed: {exc}")
        print("Make sure the API is running (uvicorn app.api.main:app).")
        sys.exit(1)


if __name__ == "__main__":
    main()
