"""
This module contains the IOInterface abstract base class and its implementations.

The console adapter writes through an IOInterface and reads card choices and
the player count from it, which keeps the adapter testable.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from abc import ABC, abstractmethod

import aiofiles

logger = logging.getLogger(__name__)


class IOInterface(ABC):
    """
    Abstract base class for an IO interface.

    This class defines the interface for input/output operations in the game.
    """

    @abstractmethod
    def output(self, message: str) -> None:
        """Output a message to the interface."""
        pass

    @abstractmethod
    def input(self, prompt: str) -> str:
        """Get input from the user with a prompt."""
        pass

    async def output_async(self, message: str) -> None:
        """Async version of output. Runs the sync call by default."""
        self.output(message)

    async def input_async(self, prompt: str) -> str:
        """Async version of input. Runs the sync call by default."""
        return self.input(prompt)


class TestIOInterface(IOInterface):
    """
    A test IO interface for testing purposes. Collects output messages and
    replays queued input responses.

    Methods
    -------
    def output(self, message):
        Collect an output message.

    def input(self, prompt):
        Return the next queued response.

    def add_input(self, *responses):
        Queue responses for later input() calls.
    """

    __test__ = False

    def __init__(self, responses=None):
        self.sent_messages = []
        self.prompts = []
        self.input_responses = list(responses or [])

    def output(self, message: str) -> None:
        self.sent_messages.append(message)

    def input(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.input_responses:
            return self.input_responses.pop(0)
        raise ValueError("No more input left in TestIOInterface queue.")

    def add_input(self, *responses: str) -> None:
        """Queue responses for later input() calls."""
        self.input_responses.extend(responses)


class ConsoleIOInterface(IOInterface):
    """
    A console IO interface for interactive gameplay.

    Input is read on a daemon thread so a waiting prompt does not block the
    event loop. An unanswered prompt never keeps the interpreter alive after
    Ctrl-C.
    """

    def output(self, message: str) -> None:
        print(message)

    def input(self, prompt: str) -> str:
        return input(prompt)

    async def input_async(self, prompt: str) -> str:
        loop = asyncio.get_running_loop()
        answer = loop.create_future()

        def read_line():
            try:
                line = self.input(prompt)
            except Exception as exc:
                self._deliver(loop, answer, error=exc)
            else:
                self._deliver(loop, answer, line)

        thread = threading.Thread(target=read_line, name="durak-console-input")
        thread.daemon = True
        thread.start()
        return await answer

    @staticmethod
    def _deliver(loop, future, line=None, error=None) -> None:
        def settle():
            if future.done():
                return
            if error is not None:
                future.set_exception(error)
            else:
                future.set_result(line)

        try:
            loop.call_soon_threadsafe(settle)
        except RuntimeError:
            logger.debug("Console input arrived after the event loop closed")


class TranscriptIOInterface(IOInterface):
    """
    Mirrors every output line of another interface into a transcript file.

    Input is delegated to the wrapped interface; the prompt is recorded too.
    """

    def __init__(self, inner: IOInterface, log_file_path: str):
        self.inner = inner
        self.log_file_path = log_file_path

    def output(self, message: str) -> None:
        """Write an output message to the transcript and the wrapped interface."""
        self.inner.output(message)
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(message + "\n")

    def input(self, prompt: str) -> str:
        response = self.inner.input(prompt)
        with open(self.log_file_path, "a", encoding="utf-8") as log_file:
            log_file.write(f"{prompt}{response}\n")
        return response

    async def output_async(self, message: str) -> None:
        """Async version of output that appends with aiofiles."""
        await self.inner.output_async(message)
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(message + "\n")

    async def input_async(self, prompt: str) -> str:
        response = await self.inner.input_async(prompt)
        async with aiofiles.open(
            self.log_file_path, mode="a", encoding="utf-8"
        ) as log_file:
            await log_file.write(f"{prompt}{response}\n")
        return response
