"""Input and window events, and a dispatcher for their callbacks."""

from __future__ import annotations

import enum
import itertools
from dataclasses import dataclass, field
from typing import Callable, ClassVar, Dict, Union


class KeyCode(enum.IntEnum):
    MouseLeft = 0
    MouseRight = 1
    MouseMiddle = 2
    MouseButton4 = 3
    MouseButton5 = 4
    MouseButton6 = 6
    MouseButton7 = 7
    MouseButton8 = 8

    Space = 32
    Apostrophe = 39
    Comma = 44
    Minus = 45
    Period = 46
    Slash = 47

    D0 = 48
    D1 = 49
    D2 = 50
    D3 = 51
    D4 = 52
    D5 = 53
    D6 = 54
    D7 = 55
    D8 = 56
    D9 = 57

    Semicolon = 59
    Equal = 61

    A = 65
    B = 66
    C = 67
    D = 68
    E = 69
    F = 70
    G = 71
    H = 72
    I = 73  # noqa: E741
    J = 74
    K = 75
    L = 76
    M = 77
    N = 78
    O = 79  # noqa: E741
    P = 80
    Q = 81
    R = 82
    S = 83
    T = 84
    U = 85
    V = 86
    W = 87
    X = 88
    Y = 89
    Z = 90

    LeftBracket = 91
    Backslash = 92
    RightBracket = 93
    GraveAccent = 96

    World1 = 161
    World2 = 162

    Escape = 256
    Enter = 257
    Tab = 258
    Backspace = 259
    Insert = 260
    Delete = 261
    Right = 262
    Left = 263
    Down = 264
    Up = 265
    PageUp = 266
    PageDown = 267
    Home = 268
    End = 269
    CapsLock = 280
    ScrollLock = 281
    NumLock = 282
    PrintScreen = 283
    Pause = 284
    F1 = 290
    F2 = 291
    F3 = 292
    F4 = 293
    F5 = 294
    F6 = 295
    F7 = 296
    F8 = 297
    F9 = 298
    F10 = 299
    F11 = 300
    F12 = 301
    F13 = 302
    F14 = 303
    F15 = 304
    F16 = 305
    F17 = 306
    F18 = 307
    F19 = 308
    F20 = 309
    F21 = 310
    F22 = 311
    F23 = 312
    F24 = 313
    F25 = 314

    KP0 = 320
    KP1 = 321
    KP2 = 322
    KP3 = 323
    KP4 = 324
    KP5 = 325
    KP6 = 326
    KP7 = 327
    KP8 = 328
    KP9 = 329
    KPDecimal = 330
    KPDivide = 331
    KPMultiply = 332
    KPSubtract = 333
    KPAdd = 334
    KPEnter = 335
    KPEqual = 336

    LeftShift = 340
    LeftControl = 341
    LeftAlt = 342
    LeftSuper = 343
    RightShift = 344
    RightControl = 345
    RightAlt = 346
    RightSuper = 347
    Menu = 348

    NONE = 349


class PressType(enum.IntEnum):
    Release = 0
    Press = 1
    Repeat = 2
    NONE = 3


class PressMode(enum.IntFlag):
    WithNone = 0x0000
    WithShift = 0x0001
    WithControl = 0x0002
    WithAlt = 0x0004
    WithSuper = 0x0008
    WithCapsLock = 0x0010
    WithNumLock = 0x0020


class EventType(enum.Enum):
    NONE = 0
    FRAME_RESIZE = 1
    KEYBOARD_INPUT = 2
    MOUSE_MOVE = 3
    SCROLL = 4


# Keys that have no readable name of their own.
_UNNAMED_KEYS = frozenset({KeyCode.D0, KeyCode.NONE})
_NAMED_MODES = frozenset(
    {
        PressMode.WithNone,
        PressMode.WithShift,
        PressMode.WithControl,
        PressMode.WithAlt,
        PressMode.WithSuper,
    }
)


def key_name(key: Union[KeyCode, int]) -> str:
    """Readable name such as ``KeyCode::W``; unknown keys give ``KeyCode::None``."""
    try:
        code = KeyCode(key)
    except ValueError:
        return "KeyCode::None"
    if code in _UNNAMED_KEYS:
        return "KeyCode::None"
    return f"KeyCode::{code.name}"


def press_type_name(press_type: Union[PressType, int]) -> str:
    """Readable name such as ``PressType::Press``."""
    try:
        kind = PressType(press_type)
    except ValueError:
        return "PressType::None"
    if kind is PressType.NONE:
        return "PressType::None"
    return f"PressType::{kind.name}"


def press_mode_name(mode: Union[PressMode, int]) -> str:
    """Readable name of a single modifier; unnamed modifiers give ``PressMode::None``."""
    if mode in _NAMED_MODES:
        return f"PressMode::{PressMode(mode).name}"
    return "PressMode::None"


@dataclass
class Event:
    """Base of all events; setting ``done`` stops further dispatch."""

    done: bool = field(default=False, kw_only=True)
    event_type: ClassVar[EventType] = EventType.NONE

    @property
    def type(self) -> EventType:
        return self.event_type

    @property
    def name(self) -> str:
        return self.event_type.name

    def describe(self) -> str:
        return self.name


@dataclass
class FrameResizeEvent(Event):
    width: int
    height: int
    event_type: ClassVar[EventType] = EventType.FRAME_RESIZE

    def describe(self) -> str:
        return f"FrameBufferResize: Width({self.width}) Height({self.height})"


_MODE_REPORT_ORDER = (
    PressMode.WithAlt,
    PressMode.WithCapsLock,
    PressMode.WithControl,
    PressMode.WithNumLock,
    PressMode.WithShift,
    PressMode.WithSuper,
)


@dataclass
class KeyboardEvent(Event):
    code: KeyCode
    press: PressType
    mode: int = 0
    event_type: ClassVar[EventType] = EventType.KEYBOARD_INPUT

    def describe(self) -> str:
        parts = ["KeyboardInput:", press_type_name(self.press), key_name(self.code)]
        parts.extend(press_mode_name(flag) for flag in _MODE_REPORT_ORDER if self.mode & flag)
        return " ".join(parts)


@dataclass
class MouseMoveEvent(Event):
    xpos: float
    ypos: float
    event_type: ClassVar[EventType] = EventType.MOUSE_MOVE

    def describe(self) -> str:
        return f"Mouse Move: xpos({self.xpos:f}) ypos({self.ypos:f})"


@dataclass
class ScrollEvent(Event):
    xoffset: float
    yoffset: float
    event_type: ClassVar[EventType] = EventType.SCROLL

    def describe(self) -> str:
        return f"Scroll: xoffset({self.xoffset:f}) yoffset({self.yoffset:f})"


Callback = Callable[[Event], None]


class EventManager:
    """Dispatches events to callbacks in the order they were registered."""

    def __init__(self) -> None:
        self._ids = itertools.count()
        self._callbacks: Dict[int, Callback] = {}

    def trigger(self, event: Event) -> None:
        """Call each callback until one marks the event as done."""
        for callback in list(self._callbacks.values()):
            callback(event)
            if event.done:
                break

    def register(self, callback: Callback) -> int:
        """Add a callback and return the id that removes it again."""
        event_id = next(self._ids)
        self._callbacks[event_id] = callback
        return event_id

    def unregister(self, event_id: int) -> None:
        """Remove a callback; unknown ids are ignored."""
        self._callbacks.pop(event_id, None)