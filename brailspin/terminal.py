"""Keypress trigger and terminal-state guards used around a running spinner."""
from __future__ import annotations

import asyncio
from contextlib import contextmanager
from typing import Iterator

from prompt_toolkit.input import Input, create_input

from .frames import CURSOR_SHOW
from .tui.animation import Sink


def open_input() -> Input:
    """Return a prompt_toolkit input reading from the controlling terminal."""
    return create_input()


@contextmanager
def raw_input(input_: Input) -> Iterator[Input]:
    """Keep ``input_`` in raw mode so keypresses are neither buffered nor echoed."""
    with input_.raw_mode():
        yield input_


async def wait_for_keypress(input_: Input) -> None:
    """Return once at least one key arrives on ``input_`` or it is closed."""
    pressed = asyncio.Event()

    def _keys_ready() -> None:
        if input_.read_keys() or input_.flush_keys() or input_.closed:
            pressed.set()

    with input_.attach(_keys_ready):
        await pressed.wait()


@contextmanager
def visible_cursor(sink: Sink) -> Iterator[None]:
    """Write the show-cursor sequence when the block exits, however it exits."""
    try:
        yield
    finally:
        sink.write(CURSOR_SHOW)
        sink.flush()


__all__ = ["open_input", "raw_input", "visible_cursor", "wait_for_keypress"]
