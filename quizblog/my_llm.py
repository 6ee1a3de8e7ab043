# quizblog/my_llm.py
import asyncio
import logging
from typing import Optional

from huggingface_hub import InferenceClient

log = logging.getLogger(__name__)

MODEL_MAP = {
    "llama-3-8b": "meta-llama/Llama-3.1-8B-Instruct",
    "llama-3-70b": "meta-llama/Meta-Llama-3-70B-Instruct",
    "mistral-7b": "mistralai/Mistral-7B-Instruct-v0.3",
    "qwen-7b": "Qwen/Qwen2.5-7B-Instruct",
    "flan-t5": "google/flan-t5-large",
}
DEFAULT_MODEL = "meta-llama/Llama-3.1-8B-Instruct"

# Cache for loaded local models
LOCAL_MODELS = {}


def resolve_model(model_id: str) -> str:
    # full hub ids ("org/name") pass through; unknown short names use DEFAULT_MODEL
    if model_id in MODEL_MAP:
        return MODEL_MAP[model_id]
    if "/" in model_id:
        return model_id
    log.warning("Unknown model %r; falling back to %s", model_id, DEFAULT_MODEL)
    return DEFAULT_MODEL


def _load_local(hf_model: str):
    import torch
    from transformers import AutoTokenizer, AutoModelForCausalLM, AutoModelForSeq2SeqLM

    if hf_model in LOCAL_MODELS:
        return LOCAL_MODELS[hf_model]

    log.info("Loading %s locally...", hf_model)
    tokenizer = AutoTokenizer.from_pretrained(hf_model)

    # Flan-T5 is Seq2Seq, LLaMA/Mistral are CausalLM
    if "t5" in hf_model or "bart" in hf_model:
        model = AutoModelForSeq2SeqLM.from_pretrained(
            hf_model,
            torch_dtype=torch.float16,
            device_map="auto"
        )
    else:
        model = AutoModelForCausalLM.from_pretrained(
            hf_model,
            torch_dtype=torch.float16,
            device_map="auto"
        )

    LOCAL_MODELS[hf_model] = (tokenizer, model)
    return LOCAL_MODELS[hf_model]


def load_client(model_id: str, backend: str = "hf", token: Optional[str] = None):
    """
    Build the text-generation client.

    backend="hf" talks to the Hugging Face Inference API with a bearer token.
    backend="local" loads a transformers (tokenizer, model) pair and caches it.
    """
    hf_model = resolve_model(model_id)
    if backend == "local":
        return _load_local(hf_model)
    if backend != "hf":
        raise ValueError(f"Unknown LLM backend: {backend!r}")
    log.info("Using HF Inference API for %s", hf_model)
    return InferenceClient(model=hf_model, token=token)


def _generate_local(client, prompt: str, max_new_tokens: int) -> str:
    tokenizer, model = client
    inputs = tokenizer(prompt, return_tensors="pt").to(model.device)
    outputs = model.generate(
        **inputs,
        max_new_tokens=max_new_tokens,
        do_sample=True,
        temperature=0.7
    )
    tokens = outputs[0]
    if not model.config.is_encoder_decoder:
        # causal models echo the prompt
        tokens = tokens[inputs["input_ids"].shape[1]:]
    return tokenizer.decode(tokens, skip_special_tokens=True)


async def generate(client, prompt: str, max_new_tokens: int = 512) -> str:
    """
    Generate text using either local model (transformers) or HF Inference API.
    Both are blocking, so they run in the default executor.
    """
    loop = asyncio.get_event_loop()
    if isinstance(client, tuple):  # local (tokenizer, model)
        return await loop.run_in_executor(None, _generate_local, client, prompt, max_new_tokens)

    else:  # HF API client
        resp = await loop.run_in_executor(
            None,
            lambda: client.text_generation(
                prompt,
                max_new_tokens=max_new_tokens,
                temperature=0.7,
            )
        )
        return resp
