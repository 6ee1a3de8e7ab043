import textwrap

import pytest

WELL_FORMED = textwrap.dedent("""\
    Question: What does a backlink point to?
    A) A stylesheet
    B) The post that references the current one
    C) An image
    D) A font file
    Correct Answer: B) The post that references the current one
""")


class FakeClient:
    """Stands in for huggingface_hub.InferenceClient."""

    def __init__(self, reply=WELL_FORMED, error=None):
        self.reply = reply
        self.error = error
        self.prompts = []

    def text_generation(self, prompt, max_new_tokens=512, temperature=0.7):
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        return self.reply


@pytest.fixture
def fake_client():
    return FakeClient()


def write_post(root, slug, body, **meta):
    path = root / f"{slug}.md"
    path.parent.mkdir(parents=True, exist_ok=True)
    head = "".join(f"{k}: {v}\n" for k, v in meta.items())
    text = f"---\n{head}---\n{body}" if meta else body
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def posts_dir(tmp_path):
    root = tmp_path / "posts"
    write_post(root, "Page 1", "Intro that links to [[Page 2]] and [[Glossary|terms]].\n",
               title="Page 1", excerpt="First page", date="2024-01-01")
    write_post(root, "Page 2", "Back to [[Page 1]]. Also [[Page 2]] itself and [[Missing]].\n",
               title="Page 2", excerpt="Second page", date="2024-01-02")
    write_post(root, "Glossary", "# Glossary\n\nTerms used across [[Page 1]] and [[Page 1#intro]].\n")
    write_post(root, "notes/deep", "Nested note pointing at [[Page 2]].\n", title="Deep note")
    return root
