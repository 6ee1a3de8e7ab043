import asyncio
import threading
from types import SimpleNamespace

import pytest

from quizblog import registry
from quizblog.my_llm import DEFAULT_MODEL, MODEL_MAP, generate, resolve_model


def test_resolve_model():
    assert resolve_model("mistral-7b") == MODEL_MAP["mistral-7b"]
    assert resolve_model("org/custom-model") == "org/custom-model"


def test_unknown_short_name_falls_back_with_warning(caplog):
    with caplog.at_level("WARNING", logger="quizblog.my_llm"):
        assert resolve_model("no-such-model") == DEFAULT_MODEL
    assert "no-such-model" in caplog.text


class FakeIds:
    shape = (1, 2)


class FakeInputs(dict):
    def to(self, device):
        return self


class FakeTokenizer:
    def __call__(self, prompt, return_tensors=None):
        return FakeInputs(input_ids=FakeIds())

    def decode(self, tokens, skip_special_tokens=True):
        return " ".join(str(t) for t in tokens)


class FakeModel:
    device = "cpu"
    config = SimpleNamespace(is_encoder_decoder=False)

    def __init__(self):
        self.thread = None

    def generate(self, **kwargs):
        self.thread = threading.get_ident()
        return [[1, 2, 3, 4]]


def test_local_backend_runs_off_the_event_loop():
    model = FakeModel()

    async def scenario():
        out = await generate((FakeTokenizer(), model), "prompt", max_new_tokens=8)
        return out, threading.get_ident()

    out, loop_thread = asyncio.run(scenario())
    # prompt tokens are stripped from causal output
    assert out == "3 4"
    assert model.thread is not None and model.thread != loop_thread


@pytest.fixture
def fresh_registry():
    registry.reset_clients()
    yield
    registry.reset_clients()


def test_registry_caches_client_until_reset(monkeypatch, fresh_registry):
    built = []

    def fake_load(model_id, backend="hf", token=None):
        built.append((model_id, backend))
        return object()

    monkeypatch.setattr(registry, "load_client", fake_load)
    first = registry.get_client()
    assert registry.get_client() is first
    assert len(built) == 1

    registry.reset_clients()
    assert registry.get_client() is not first
    assert len(built) == 2
