"""
Bootstrap environment for Streamlit Cloud & local dev:
- Flatten st.secrets into uppercase os.environ keys (nested -> PREFIX_CHILD),
  so a ``[bigquery]`` table with ``dataset = ...`` becomes BIGQUERY_DATASET
- If GOOGLE_CREDENTIALS_JSON is provided in secrets (dict or JSON string),
  write it to /tmp/google-credentials.json and set GOOGLE_APPLICATION_CREDENTIALS
- Finally, load .env (without overriding existing env vars)
"""

from __future__ import annotations

import json
import logging
import os
import re
from typing import Any, Dict, Iterator, Optional, Tuple

import streamlit as st
from dotenv import load_dotenv

logger = logging.getLogger(__name__)

CREDENTIALS_TMP_PATH = "/tmp/google-credentials.json"


def _sanitize_key(key: str) -> str:
    return re.sub(r"[^A-Za-z0-9_]", "_", key.upper())


def flatten_secrets(prefix: str, val: Any) -> Iterator[Tuple[str, str]]:
    if isinstance(val, dict):
        for k, v in val.items():
            yield from flatten_secrets(f"{prefix}_{k}", v)
    else:
        yield _sanitize_key(prefix), str(val)


def _secrets_dict() -> Optional[Dict[str, Any]]:
    try:
        items = getattr(st, "secrets", None)
        if not items:
            return None
        try:
            return items.to_dict()  # type: ignore[attr-defined]
        except AttributeError:
            return dict(items)
    except Exception as exc:
        # st.secrets raises FileNotFoundError / StreamlitSecretNotFoundError without secrets.toml
        logger.debug("No Streamlit secrets available: %s", exc)
        return None


def bridge_secrets_to_env(secrets: Optional[Dict[str, Any]] = None) -> None:
    secrets = _secrets_dict() if secrets is None else secrets
    if not secrets:
        return
    for key, value in secrets.items():
        if key == "GOOGLE_CREDENTIALS_JSON":
            continue
        for flat_k, flat_v in flatten_secrets(key, value):
            os.environ.setdefault(flat_k, flat_v)


def materialize_google_credentials(secrets: Optional[Dict[str, Any]] = None) -> None:
    """Create a temp service account file from secrets if needed.

    Priority:
    1) If GOOGLE_APPLICATION_CREDENTIALS already set and exists -> keep
    2) Else if GOOGLE_CREDENTIALS_JSON provided in secrets -> write to /tmp and set env
    3) Else do nothing (the BigQuery client falls back to default credentials)
    """
    existing_path = os.getenv("GOOGLE_APPLICATION_CREDENTIALS")
    if existing_path and os.path.exists(existing_path):
        return

    secrets = _secrets_dict() if secrets is None else secrets
    if not secrets:
        return
    creds = secrets.get("GOOGLE_CREDENTIALS_JSON")
    if not creds:
        return
    if isinstance(creds, dict):
        json_text = json.dumps(creds)
    else:
        json_text = str(creds)
        try:
            json.loads(json_text)
        except ValueError:
            logger.warning("GOOGLE_CREDENTIALS_JSON secret is not valid JSON; ignoring it")
            return
    with open(CREDENTIALS_TMP_PATH, "w", encoding="utf-8") as f:
        f.write(json_text)
    os.environ["GOOGLE_APPLICATION_CREDENTIALS"] = CREDENTIALS_TMP_PATH
    logger.debug("Service account credentials written to %s", CREDENTIALS_TMP_PATH)


def ensure_env() -> None:
    """Idempotent: make sure env vars and creds are available.
    Safe to call multiple times, both inside and outside Streamlit runtime.
    """
    secrets = _secrets_dict()
    bridge_secrets_to_env(secrets or {})
    materialize_google_credentials(secrets or {})
    # load_dotenv will not override existing env vars by default
    load_dotenv()


# Execute on import for Streamlit main process, but also allow explicit calls elsewhere.
ensure_env()
