"""Low-level terminal input decoding.

Reads raw bytes from stdin and translates them into normalized key tokens.
Handles ESC-sequence timing, arrow keys in normal and application mode,
and swallows SGR mouse reports so clicks never leak into the filter.
"""

from __future__ import annotations

import os
import select

ESC_SEQUENCE_TIMEOUT_MS = 25
MAX_MOUSE_PAYLOAD_BYTES = 64

EOF = "EOF"

_CONTROL_TOKENS: dict[bytes, str] = {
    b"\x03": "CTRL_C",
    b"\x04": "CTRL_D",
    b"\t": "TAB",
    b"\x08": "BACKSPACE",
    b"\x7f": "BACKSPACE",
    b"\x15": "CTRL_U",
    b"\r": "ENTER",
    b"\n": "ENTER",
}

_ARROW_TOKENS: dict[bytes, str] = {
    b"A": "UP",
    b"B": "DOWN",
    b"C": "RIGHT",
    b"D": "LEFT",
}


class KeyReader:
    """Decode key tokens from one file descriptor.

    Bytes read ahead while resolving a lone ESC are kept on the reader and
    replayed by the next ``read_key`` call.
    """

    def __init__(self, fd: int, esc_timeout_ms: int = ESC_SEQUENCE_TIMEOUT_MS) -> None:
        self.fd = fd
        self.esc_timeout_ms = esc_timeout_ms
        self._pending: list[bytes] = []

    def _read_ready_byte(self, timeout_ms: int) -> bytes | None:
        ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
        if not ready:
            return None
        ch = os.read(self.fd, 1)
        if not ch:
            return None
        return ch

    def read_key(self, timeout_ms: int | None = None) -> str:
        """Block for the next key token.

        Returns ``""`` when ``timeout_ms`` elapses without input and ``EOF``
        once the descriptor is closed.
        """
        if self._pending:
            ch = self._pending.pop(0)
        else:
            if timeout_ms is not None:
                ready, _, _ = select.select([self.fd], [], [], max(0.0, timeout_ms / 1000.0))
                if not ready:
                    return ""
            ch = os.read(self.fd, 1)
            if not ch:
                return EOF

        token = _CONTROL_TOKENS.get(ch)
        if token is not None:
            return token
        if ch != b"\x1b":
            return self._decode_text_byte(ch)
        return self._read_escape_sequence()

    def _decode_text_byte(self, ch: bytes) -> str:
        if ch[0] < 0x80:
            return ch.decode("ascii")
        # Drain the rest of a UTF-8 sequence so it decodes as one token.
        expected = 1 if ch[0] >= 0xC0 else 0
        if ch[0] >= 0xE0:
            expected = 2
        if ch[0] >= 0xF0:
            expected = 3
        data = ch
        for _ in range(expected):
            nxt = self._read_ready_byte(self.esc_timeout_ms)
            if nxt is None:
                break
            data += nxt
        return data.decode("utf-8", errors="replace")

    def _read_escape_sequence(self) -> str:
        seq = self._read_ready_byte(self.esc_timeout_ms)
        if seq is None:
            return "ESC"
        if seq not in {b"[", b"O"}:
            self._pending.append(seq)
            return "ESC"
        introducer = seq
        seq = self._read_ready_byte(self.esc_timeout_ms)
        if seq is None:
            return "ESC"
        arrow = _ARROW_TOKENS.get(seq)
        if arrow is not None:
            return arrow
        if introducer == b"[" and seq == b"<":
            return self._consume_sgr_mouse()
        if introducer == b"[" and seq == b"M":
            # Legacy X10 mouse report: three payload bytes follow.
            for _ in range(3):
                if self._read_ready_byte(self.esc_timeout_ms) is None:
                    break
            return "MOUSE"
        if introducer == b"[":
            return self._consume_csi_tail(seq)
        return "ESC"

    def _consume_sgr_mouse(self) -> str:
        # SGR mouse: ESC [ < btn ; col ; row (M/m)
        size = 0
        while True:
            part = self._read_ready_byte(self.esc_timeout_ms)
            if part is None:
                return "ESC"
            if part in {b"M", b"m"}:
                return "MOUSE"
            size += 1
            if size > MAX_MOUSE_PAYLOAD_BYTES:
                return "ESC"

    def _consume_csi_tail(self, first: bytes) -> str:
        """Skip an unrecognized CSI sequence up to its final byte."""
        part: bytes | None = first
        size = 0
        while part is not None and not (0x40 <= part[0] <= 0x7E):
            part = self._read_ready_byte(self.esc_timeout_ms)
            size += 1
            if size > MAX_MOUSE_PAYLOAD_BYTES:
                break
        return "UNKNOWN"

