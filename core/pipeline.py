"""Shared consumer/processor/producer scaffolding."""
from __future__ import annotations

import logging
import sys
from dataclasses import dataclass
from typing import Any, Dict, Generic, Optional, Protocol, TypeVar

from .cli_errors import ExitCode, exit_code_for

LOG = logging.getLogger(__name__)

PayloadT = TypeVar("PayloadT")
ResultT = TypeVar("ResultT")
RequestT = TypeVar("RequestT")
T = TypeVar("T")
R = TypeVar("R")


@dataclass
class ResultEnvelope(Generic[ResultT]):
    status: str
    payload: Optional[ResultT] = None
    diagnostics: Optional[dict[str, Any]] = None

    def ok(self) -> bool:
        return self.status.lower() == "success"

    def unwrap(self) -> ResultT:
        """Return payload or raise ValueError. Use after ok() check."""
        if self.payload is None:
            msg = (self.diagnostics or {}).get("message", "No payload")
            raise ValueError(msg)
        return self.payload


class Consumer(Protocol[PayloadT]):
    def consume(self) -> PayloadT:
        ...


class Processor(Protocol[PayloadT, ResultT]):
    def process(self, payload: PayloadT) -> ResultT:
        ...


class Producer(Protocol[ResultT]):
    def produce(self, result: ResultT) -> None:
        ...


class RequestConsumer(Generic[RequestT], Consumer[RequestT]):
    """Generic consumer that wraps any request object.

    Example usage:
        consumer = RequestConsumer(ParseRequest(source="report.html"))
        payload = consumer.consume()  # Returns the request
    """

    def __init__(self, request: RequestT) -> None:
        self._request = request

    def consume(self) -> RequestT:  # pragma: no cover - trivial
        return self._request


class BaseProducer:
    """Base class for pipeline producers with common error handling.

    Subclasses override _produce_success(); failed envelopes print their
    message to stderr here.
    """

    def produce(self, result: ResultEnvelope) -> None:
        """Template method: handle errors, delegate success to subclass."""
        if self.print_error(result):
            return
        if result.payload is not None:
            self._produce_success(result.payload, result.diagnostics)

    def _produce_success(self, payload: Any, diagnostics: Optional[Dict[str, Any]]) -> None:
        """Override in subclass to handle successful result output."""
        raise NotImplementedError("Subclass must implement _produce_success")

    @staticmethod
    def print_error(result: ResultEnvelope) -> bool:
        """Print error message if result failed. Returns True if the result failed."""
        if result.ok():
            return False
        diagnostics = result.diagnostics or {}
        msg = diagnostics.get("message")
        if msg:
            print(f"Error: {msg}", file=sys.stderr)
        hint = diagnostics.get("hint")
        if hint:
            print(f"Hint: {hint}", file=sys.stderr)
        return True


class SafeProcessor(Generic[T, R]):
    """Base processor with automatic error handling wrapper.

    Subclasses override _process_safe(); any exception becomes an error
    envelope whose diagnostics carry the message, hint and exit code.

    Example usage:
        class ParseProcessor(SafeProcessor[ParseRequest, ParsedReport]):
            def _process_safe(self, payload: ParseRequest) -> ParsedReport:
                return parse_report(read_source(payload.source))
    """

    def process(self, payload: T) -> ResultEnvelope[R]:
        """Wrap _process_safe with error handling."""
        try:
            result = self._process_safe(payload)
            return ResultEnvelope(status="success", payload=result)
        except Exception as e:
            LOG.debug("%s failed", type(self).__name__, exc_info=True)
            return ResultEnvelope(status="error", diagnostics={
                "message": str(e),
                "hint": getattr(e, "hint", None),
                "code": int(exit_code_for(e)),
            })

    def _process_safe(self, payload: T) -> R:
        """Override to implement processing logic without error handling boilerplate."""
        raise NotImplementedError("Subclass must implement _process_safe")


def run_pipeline(request: Any, processor: Any, producer: Any) -> int:
    """Execute a pipeline and return CLI exit code.

    1. Process the request
    2. Produce output
    3. Return the exit code

    Args:
        request: The request object to process
        processor: Processor instance (or class, instantiated with no args)
        producer: Producer instance (or class, instantiated with no args)

    Returns:
        0 on success, or the code from diagnostics (default 1)
    """
    if isinstance(processor, type):
        processor = processor()
    if isinstance(producer, type):
        producer = producer()
    envelope = processor.process(RequestConsumer(request).consume())
    producer.produce(envelope)
    if envelope.ok():
        return ExitCode.SUCCESS
    return int((envelope.diagnostics or {}).get("code", ExitCode.ERROR))
