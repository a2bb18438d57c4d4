"""
Simulated doctor chat.

Key patterns:
- Threads keyed by doctor id, never by list position
- Each sent message schedules one asyncio task: a random "doctor is typing"
  delay followed by a symptom engine reply
- Pending reply tasks are tracked per thread so closing a thread cancels them
- A reply that wakes up after its thread is gone is dropped, not requeued
"""

import asyncio
import random
from functools import partial
from typing import Generic, TypeVar
from uuid import UUID

import structlog

from careline.config import ChatConfig
from careline.domain.models import ChatMessage, ChatThread, Doctor, Sender
from careline.services.symptom_engine import SymptomEngine

logger = structlog.get_logger(__name__)

# Generic Result type for explicit error handling
ValueT = TypeVar("ValueT")
ErrorT = TypeVar("ErrorT", bound=BaseException)


class Result(Generic[ValueT, ErrorT]):
    """
    Explicit error handling without exceptions for expected failures.

    Why: Makes error paths visible in type system, forces handling decisions.
    When to use: When failure is expected business logic, not exceptional.
    """

    def __init__(self, value: ValueT | None = None, error: ErrorT | None = None) -> None:
        if value is not None and error is not None:
            raise ValueError("Result cannot have both value and error")
        if value is None and error is None:
            raise ValueError("Result must have either value or error")
        self._value: ValueT | None = value
        self._error: ErrorT | None = error

    @classmethod
    def ok(cls, value: ValueT) -> "Result[ValueT, ErrorT]":
        return cls(value=value)

    @classmethod
    def err(cls, error: ErrorT) -> "Result[ValueT, ErrorT]":
        return cls(error=error)

    def is_ok(self) -> bool:
        return self._error is None

    def is_err(self) -> bool:
        return self._error is not None

    def unwrap(self) -> ValueT:
        if self._error:
            raise self._error
        return self._value  # type: ignore

    def unwrap_or(self, default: ValueT) -> ValueT:
        return self._value if self._error is None else default  # type: ignore

    def unwrap_err(self) -> ErrorT:
        if self._error is None:
            raise ValueError("Called unwrap_err() on an Ok value")
        return self._error


class ThreadClosedError(LookupError):
    """The chat thread a reply was meant for no longer exists."""

    def __init__(self, doctor_id: UUID) -> None:
        super().__init__(f"Chat thread for doctor {doctor_id} was closed")
        self.doctor_id = doctor_id


ReplyResult = Result[ChatMessage, ThreadClosedError]


def welcome_text(doctor: Doctor) -> str:
    return (
        f"Hello, this is {doctor.name}. I can offer general guidance. "
        "For emergencies, call local services or go to the nearest ER."
    )


class ChatService:
    """
    In-memory chat threads with an offline doctor persona.

    All mutation happens on the event loop thread, so no locking is needed.
    """

    def __init__(self, engine: SymptomEngine | None = None, config: ChatConfig | None = None) -> None:
        self.engine = engine or SymptomEngine()
        self.config = config or ChatConfig()
        self._threads: dict[UUID, ChatThread] = {}
        self._pending: dict[UUID, set[asyncio.Task[ReplyResult]]] = {}
        # Replies of closed threads that were left running
        self._detached: set[asyncio.Task[ReplyResult]] = set()
        self.logger = logger.bind(component="chat_service")

    @property
    def threads(self) -> list[ChatThread]:
        return list(self._threads.values())

    def get_thread(self, doctor_id: UUID) -> ChatThread | None:
        return self._threads.get(doctor_id)

    def ensure_thread(self, doctor: Doctor) -> ChatThread:
        """Return the doctor's thread, creating an empty one if needed."""
        thread = self._threads.get(doctor.id)
        if thread is None:
            thread = ChatThread(doctor=doctor)
            self._threads[doctor.id] = thread
            self.logger.info("thread_created", doctor=doctor.name, specialty=doctor.specialty.value)
        return thread

    def append_welcome(self, doctor: Doctor) -> ChatMessage | None:
        """Greet the user once, only in an existing thread with no messages yet."""
        thread = self._threads.get(doctor.id)
        if thread is None or thread.messages:
            return None
        message = ChatMessage(sender=Sender.DOCTOR, text=welcome_text(doctor))
        thread.messages.append(message)
        return message

    def send_message(self, text: str, doctor: Doctor) -> "asyncio.Task[ReplyResult]":
        """
        Append the user's message and schedule the simulated doctor reply.

        Must be called from a running event loop. Returns the reply task so
        callers can await the outcome.
        """
        if not text.strip():
            raise ValueError("Cannot send an empty message")

        thread = self.ensure_thread(doctor)
        thread.messages.append(ChatMessage(sender=Sender.USER, text=text))
        thread.is_typing = True

        delay = random.uniform(self.config.reply_delay_min_seconds, self.config.reply_delay_max_seconds)
        task = asyncio.create_task(
            self._simulate_reply(text, doctor, thread.id, delay),
            name=f"reply-{doctor.id}",
        )
        pending = self._pending.setdefault(doctor.id, set())
        pending.add(task)
        task.add_done_callback(partial(self._forget_reply, doctor.id, pending))

        self.logger.info(
            "reply_scheduled",
            doctor=doctor.name,
            delay_seconds=round(delay, 3),
            message_length=len(text),
        )
        return task

    async def _simulate_reply(
        self, user_text: str, doctor: Doctor, thread_id: UUID, delay: float
    ) -> ReplyResult:
        try:
            await asyncio.sleep(delay)
        except asyncio.CancelledError:
            self._settle_typing(doctor.id, thread_id)
            self.logger.info("reply_cancelled", doctor=doctor.name)
            raise

        thread = self._threads.get(doctor.id)
        # A thread closed and reopened for the same doctor is a different conversation
        if thread is None or thread.id != thread_id:
            self.logger.warning("reply_dropped_thread_closed", doctor=doctor.name)
            return Result.err(ThreadClosedError(doctor.id))

        reply = self.engine.generate_reply(user_text, doctor.specialty)
        message = ChatMessage(sender=Sender.DOCTOR, text=reply)
        thread.messages.append(message)
        self._settle_typing(doctor.id, thread_id)

        self.logger.info("reply_delivered", doctor=doctor.name, reply_length=len(reply))
        return Result.ok(message)

    def _settle_typing(self, doctor_id: UUID, thread_id: UUID) -> None:
        """Keep the typing flag on only while other replies are still pending."""
        thread = self._threads.get(doctor_id)
        if thread is None or thread.id != thread_id:
            return
        current = asyncio.current_task()
        others = [task for task in self._pending.get(doctor_id, ()) if task is not current and not task.done()]
        thread.is_typing = bool(others)

    def _forget_reply(
        self,
        doctor_id: UUID,
        pending: set[asyncio.Task[ReplyResult]],
        task: asyncio.Task[ReplyResult],
    ) -> None:
        """Done callback: drop the task and the doctor's entry once nothing is pending."""
        pending.discard(task)
        # A closed and reopened thread may own a newer set under the same id
        if not pending and self._pending.get(doctor_id) is pending:
            del self._pending[doctor_id]

    def pending_replies(self, doctor_id: UUID) -> int:
        return sum(1 for task in self._pending.get(doctor_id, ()) if not task.done())

    def close_thread(self, doctor_id: UUID, cancel_pending: bool = True) -> bool:
        """
        Remove a doctor's thread.

        Pending replies are cancelled by default; with cancel_pending=False they
        are left to wake up and be dropped against the missing thread.
        """
        thread = self._threads.pop(doctor_id, None)
        if thread is None:
            return False

        cancelled = 0
        for task in list(self._pending.pop(doctor_id, ())):
            if cancel_pending:
                if task.cancel():
                    cancelled += 1
            elif not task.done():
                self._detached.add(task)
                task.add_done_callback(self._detached.discard)

        self.logger.info("thread_closed", doctor=thread.doctor.name, cancelled_replies=cancelled)
        return True

    async def wait_for_replies(self) -> list[ReplyResult]:
        """Await every pending reply; cancelled replies are left out of the result."""
        tasks = [task for pending in self._pending.values() for task in pending]
        tasks.extend(self._detached)
        outcomes = await asyncio.gather(*tasks, return_exceptions=True)
        results: list[ReplyResult] = []
        for outcome in outcomes:
            if isinstance(outcome, asyncio.CancelledError):
                continue
            if isinstance(outcome, BaseException):
                raise outcome
            results.append(outcome)
        return results
