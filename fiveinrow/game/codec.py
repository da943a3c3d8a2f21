"""Packed binary encoding of a board, as stored in saved games.

Each of the 169 cells takes 2 bits, most significant first, row-major:
``00`` white (-1), ``01`` empty, ``10`` black (1). The stream is padded with
zero bits to 43 bytes. A saved game appends the side to move as a 4-byte
big-endian signed integer.
"""

from __future__ import annotations

import struct

from .board import BOARD_SIZE, Board, BoardFormatError
from .types import EMPTY, Player

BOARD_BYTES = (BOARD_SIZE * BOARD_SIZE * 2 + 7) // 8  # 43

_CODES = {Player.WHITE.value: 0b00, EMPTY: 0b01, Player.BLACK.value: 0b10}
_VALUES = {code: value for value, code in _CODES.items()}

_SIDE = struct.Struct(">i")


def encode_board(board: Board) -> bytes:
    out = bytearray()
    current = 0
    bits = 0
    for point in board.points():
        current = (current << 2) | _CODES[board.get(point)]
        bits += 2
        if bits == 8:
            out.append(current)
            current = 0
            bits = 0
    if bits:
        out.append(current << (8 - bits))
    return bytes(out)


def decode_board(data: bytes) -> Board:
    if len(data) != BOARD_BYTES:
        raise BoardFormatError(f"Invalid data length for {BOARD_SIZE}x{BOARD_SIZE} board: {len(data)}")
    board = Board()
    for i, point in enumerate(board.points()):
        byte = data[i // 4]
        code = (byte >> (6 - 2 * (i % 4))) & 0b11
        if code not in _VALUES:
            raise BoardFormatError(f"Invalid cell code {code:02b} at {point}")
        board.set(point, _VALUES[code])
    return board


def encode_game(board: Board, side_to_move: Player) -> bytes:
    return encode_board(board) + _SIDE.pack(side_to_move.value)


def decode_game(data: bytes) -> tuple[Board, Player]:
    """Split saved-game bytes into the board and the side to move.

    Black moves next when the trailing side value is missing.
    """
    if len(data) < BOARD_BYTES:
        raise BoardFormatError(f"Saved game too short: {len(data)} bytes")
    board = decode_board(data[:BOARD_BYTES])
    tail = data[BOARD_BYTES:]
    if len(tail) < _SIDE.size:
        return board, Player.BLACK
    (side,) = _SIDE.unpack(tail[: _SIDE.size])
    try:
        return board, Player(side)
    except ValueError:
        raise BoardFormatError(f"Invalid side to move: {side}") from None
