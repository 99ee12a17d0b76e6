"""InvocationExecutor — runs tool handlers behind an isolation boundary.

Each call to :meth:`InvocationExecutor.invoke` drives one
:class:`~actions_mcp.runtime.models.Invocation` through::

    PENDING -> VALIDATING -> RUNNING -> SUCCEEDED | FAILED

Arguments are checked against the tool's input schema before the handler
runs.  Whatever the handler raises is re-raised as
:class:`~actions_mcp.errors.ToolExecutionError`, so callers only ever see
the gateway's own error types.
"""

from __future__ import annotations

import asyncio
import inspect
import json
import logging
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from actions_mcp.errors import (
    InvocationCancelledError,
    InvocationTimeoutError,
    SchemaValidationError,
    ToolExecutionError,
)
from actions_mcp.protocol.models import InvocationResult
from actions_mcp.registry.schema import validate
from actions_mcp.runtime.models import Invocation, InvocationState
from actions_mcp.utils.telemetry import (
    ATTR_INVOCATION_ID,
    ATTR_INVOCATION_STATE,
    ATTR_TOOL_NAME,
    get_tracer,
)

if TYPE_CHECKING:
    from actions_mcp.registry.models import RegisteredTool

logger = logging.getLogger(__name__)

_tracer = get_tracer(__name__)

_DEFAULT = object()


class InvocationExecutor:
    """Validates arguments and runs one handler per invocation.

    No retries: every invocation ends in exactly one terminal state.
    Running invocations can be cancelled with :meth:`cancel`; an optional
    timeout (per executor or per call) fails invocations that run too long.
    """

    def __init__(self, *, default_timeout: float | None = None) -> None:
        self._default_timeout = default_timeout
        self._in_flight: dict[str, asyncio.Future[Any]] = {}
        self._cancel_requested: set[str] = set()

    @property
    def default_timeout(self) -> float | None:
        return self._default_timeout

    def in_flight(self) -> list[str]:
        """Return the ids of invocations currently running."""
        return list(self._in_flight)

    def cancel(self, invocation_id: str) -> bool:
        """Cancel a running invocation.

        Returns ``False`` if no invocation with that id is running.
        """
        task = self._in_flight.get(invocation_id)
        if task is None or task.done():
            return False
        self._cancel_requested.add(invocation_id)
        task.cancel()
        logger.info("Cancellation requested for invocation %s", invocation_id)
        return True

    async def invoke(
        self,
        tool: RegisteredTool,
        arguments: dict[str, Any],
        *,
        timeout: float | None | object = _DEFAULT,
        invocation_id: str | None = None,
    ) -> InvocationResult:
        """Validate *arguments*, run the handler, and return its result.

        Raises
        ------
        SchemaValidationError
            The arguments do not satisfy the tool's input schema.
        ToolExecutionError
            The handler failed, timed out, or was cancelled.
        """
        extra: dict[str, Any] = {"id": invocation_id} if invocation_id is not None else {}
        invocation = Invocation(tool_name=tool.name, arguments=arguments, **extra)
        effective_timeout = self._default_timeout if timeout is _DEFAULT else timeout

        with _tracer.start_as_current_span("tool.invoke") as span:
            span.set_attribute(ATTR_TOOL_NAME, tool.name)
            span.set_attribute(ATTR_INVOCATION_ID, invocation.id)
            try:
                return await self._run(invocation, tool, effective_timeout)  # type: ignore[arg-type]
            finally:
                span.set_attribute(ATTR_INVOCATION_STATE, invocation.state.value)

    async def _run(
        self,
        invocation: Invocation,
        tool: RegisteredTool,
        timeout: float | None,
    ) -> InvocationResult:
        invocation.transition(InvocationState.VALIDATING)
        violations = validate(tool.descriptor.input_schema, invocation.arguments)
        if violations:
            error = SchemaValidationError(tool.name, violations)
            invocation.fail(str(error))
            logger.debug("Invocation %s rejected: %s", invocation.id, error)
            raise error

        invocation.transition(InvocationState.RUNNING)
        logger.debug("Invocation %s running tool %s", invocation.id, tool.name)
        task = asyncio.ensure_future(self._call_handler(tool, dict(invocation.arguments)))
        self._in_flight[invocation.id] = task
        try:
            if timeout is None:
                value = await task
            else:
                value = await asyncio.wait_for(task, timeout)
            result = _normalize(value)
        except asyncio.CancelledError:
            if invocation.id in self._cancel_requested:
                error = InvocationCancelledError(tool.name)
                invocation.fail(str(error))
                raise error from None
            if _caller_cancelling():
                # The caller itself was cancelled; stop the handler and propagate.
                task.cancel()
                invocation.fail("cancelled")
                raise
            # The handler raised CancelledError on its own.
            invocation.fail("handler raised CancelledError")
            logger.warning("Tool %s raised CancelledError", tool.name)
            raise ToolExecutionError(tool.name, "handler raised CancelledError") from None
        except TimeoutError as exc:
            if timeout is not None and task.cancelled():
                error = InvocationTimeoutError(tool.name, timeout)
                invocation.fail(str(error))
                logger.warning("Invocation %s timed out after %ss", invocation.id, timeout)
                raise error from None
            invocation.fail(str(exc))
            raise ToolExecutionError(tool.name, str(exc)) from exc
        except Exception as exc:
            invocation.fail(str(exc))
            logger.warning("Tool %s failed: %s", tool.name, exc)
            raise ToolExecutionError(tool.name, str(exc)) from exc
        finally:
            self._in_flight.pop(invocation.id, None)
            self._cancel_requested.discard(invocation.id)

        invocation.succeed(result)
        logger.debug("Invocation %s succeeded", invocation.id)
        return result

    @staticmethod
    async def _call_handler(tool: RegisteredTool, arguments: dict[str, Any]) -> Any:
        """Call the handler; plain functions run in a worker thread.

        ``SystemExit`` and other non-``Exception`` escapes are turned into a
        ``RuntimeError`` so they fail the invocation instead of the server.
        """
        handler = tool.handler
        try:
            if inspect.iscoroutinefunction(handler):
                return await handler(arguments)
            value = await asyncio.to_thread(_call_sync, handler, arguments)
            if inspect.isawaitable(value):
                value = await value
            return value
        except (Exception, asyncio.CancelledError):
            raise
        except BaseException as exc:
            raise _escaped(exc) from exc


def _call_sync(handler: Any, arguments: dict[str, Any]) -> Any:
    try:
        return handler(arguments)
    except Exception:
        raise
    except BaseException as exc:
        raise _escaped(exc) from exc


def _escaped(exc: BaseException) -> RuntimeError:
    return RuntimeError(f"handler raised {type(exc).__name__}: {exc}")


def _caller_cancelling() -> bool:
    """Whether the task awaiting the handler has a pending cancellation."""
    current = asyncio.current_task()
    return current is not None and current.cancelling() > 0


def _normalize(value: Any) -> InvocationResult:
    """Coerce a handler's return value into an :class:`InvocationResult`."""
    if isinstance(value, InvocationResult):
        return value
    if isinstance(value, str):
        return InvocationResult.from_text(value)
    if isinstance(value, dict) and "content" in value:
        try:
            return InvocationResult.model_validate(value)
        except ValidationError:
            pass
    return InvocationResult.from_text(json.dumps(value, default=str))
