#!/usr/bin/env python3
"""
Obtain a Dropbox OAuth2 refresh token for the portfolio's Dropbox storage backend.

The backend only deletes images, so the app needs write access to file content.

Required in .env or environment:
    DROPBOX_APP_KEY
    DROPBOX_APP_SECRET
    DROPBOX_REDIRECT_URI (e.g., http://localhost:8080/)

Usage:
    python scripts/get_dropbox_refresh_token.py
"""

import os
import sys
import webbrowser
from urllib.parse import urlencode

import requests
from dotenv import load_dotenv

AUTHORIZE_URL = "https://www.dropbox.com/oauth2/authorize"
TOKEN_URL = "https://api.dropboxapi.com/oauth2/token"  # noqa: S105
SCOPES = ["files.metadata.read", "files.content.write"]
HTTP_OK = 200
REQUEST_TIMEOUT = 10


def build_authorize_url(app_key: str, redirect_uri: str) -> str:
    query = urlencode(
        {
            "client_id": app_key,
            "redirect_uri": redirect_uri,
            "response_type": "code",
            "token_access_type": "offline",
            "scope": " ".join(SCOPES),
        }
    )
    return f"{AUTHORIZE_URL}?{query}"


def exchange_code(code: str, app_key: str, app_secret: str, redirect_uri: str) -> str:
    resp = requests.post(
        TOKEN_URL,
        data={
            "code": code,
            "grant_type": "authorization_code",
            "client_id": app_key,
            "client_secret": app_secret,
            "redirect_uri": redirect_uri,
        },
        timeout=REQUEST_TIMEOUT,
    )
    if resp.status_code != HTTP_OK:
        sys.exit(f"Failed to obtain refresh token: {resp.text}")
    refresh_token = resp.json().get("refresh_token")
    if not refresh_token:
        sys.exit(f"No refresh token found in response: {resp.text}")
    return refresh_token


def main() -> None:
    load_dotenv()
    app_key = os.environ.get("DROPBOX_APP_KEY")
    app_secret = os.environ.get("DROPBOX_APP_SECRET")
    redirect_uri = os.environ.get("DROPBOX_REDIRECT_URI")
    if not (app_key and app_secret and redirect_uri):
        sys.exit(
            "Missing required environment variables: "
            "DROPBOX_APP_KEY, DROPBOX_APP_SECRET, DROPBOX_REDIRECT_URI"
        )

    url = build_authorize_url(app_key, redirect_uri)
    print("\n1. Authorize the app in your browser:")  # noqa: T201
    print(url)  # noqa: T201
    webbrowser.open(url)
    print("\n2. Paste the 'code' parameter from the redirect URL.\n")  # noqa: T201
    code = input("Code: ").strip()

    refresh_token = exchange_code(code, app_key, app_secret, redirect_uri)
    print("\nAdd this to your .env as DROPBOX_REFRESH_TOKEN:\n")  # noqa: T201
    print(refresh_token)  # noqa: T201


if __name__ == "__main__":
    main()
