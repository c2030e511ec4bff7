import io
import sys
import threading
from pathlib import Path

import pytest
from PIL import Image

ROOT_DIR = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT_DIR))

from brandkit.errors import GenerationError, SchemaMismatchError  # noqa: E402
from brandkit.images import encode_data_uri  # noqa: E402


def make_image_bytes(fmt: str = "PNG", size=(4, 4)) -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", size, color=(255, 128, 0)).save(buf, format=fmt)
    return buf.getvalue()


class FakeGateway:
    """
    Scripted gateway: text call N returns "TEXT<N>", images return a small PNG.

    `fail_text_calls` holds 1-based text call numbers that raise
    GenerationError; `fail_structured` makes the adjectives call raise
    SchemaMismatchError; `fail_images` makes every image call raise.
    """

    def __init__(self, fail_text_calls=(), fail_structured=False, fail_images=False):
        self.fail_text_calls = set(fail_text_calls)
        self.fail_structured = fail_structured
        self.fail_images = fail_images
        self.calls = []
        self.text_count = 0
        self._lock = threading.Lock()
        self.image_uri = encode_data_uri(make_image_bytes(), "image/png")

    def generate_text(self, prompt):
        with self._lock:
            self.text_count += 1
            n = self.text_count
            self.calls.append(("text", prompt))
        if n in self.fail_text_calls:
            raise GenerationError(f"text call {n} failed")
        return f"TEXT{n}"

    def generate_structured(self, prompt, schema):
        with self._lock:
            self.calls.append(("structured", prompt))
        if self.fail_structured:
            raise SchemaMismatchError("bad adjectives payload")
        return schema(adj1="bold", adj2="calm")

    def generate_image(self, prompt, aspect_ratio="1:1"):
        with self._lock:
            self.calls.append(("image", aspect_ratio, prompt))
        if self.fail_images:
            raise GenerationError("image call failed")
        return self.image_uri

    def kinds(self):
        return [call[0] for call in self.calls]


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def acme_workflow(gateway):
    from brandkit.core import BrandingWorkflow

    workflow = BrandingWorkflow(gateway)
    workflow.update_input("company_name", "Acme")
    workflow.update_input("location", "Austin")
    workflow.update_input("source_language", "en")
    workflow.update_input("target_language", "pt-br")
    return workflow
