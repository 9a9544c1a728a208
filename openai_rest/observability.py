from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from opentelemetry import trace
from opentelemetry.trace import Span

logger = logging.getLogger("openai_rest")

tracer = trace.get_tracer("openai_rest")


@contextmanager
def span(name: str, **attrs) -> Iterator[Span]:
    with tracer.start_as_current_span(name) as s:
        for k, v in attrs.items():
            if v is not None:
                s.set_attribute(f"openai.{k}", v)
        yield s


def record_status(s: Optional[Span], status_code: int) -> None:
    if s is not None:
        s.set_attribute("http.status_code", status_code)
