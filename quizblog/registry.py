# quizblog/registry.py
from .config import get_settings
from .my_llm import load_client

CLIENTS = {}


def get_client():
    """Return the configured text-generation client, built once per process."""
    settings = get_settings()
    key = (settings.llm_backend, settings.model)
    if key not in CLIENTS:
        CLIENTS[key] = load_client(settings.model, backend=settings.llm_backend, token=settings.hf_token)
    return CLIENTS[key]


def reset_clients():
    CLIENTS.clear()
