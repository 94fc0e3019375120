from __future__ import annotations

import re
from enum import Enum, auto
from typing import List, Mapping, Optional

import coincurve
from bip32 import BIP32

from minitree.descriptors.utils import TaprootLeaf, TaprootRoot
from minitree.miniscript.fragments import KEY_FRAGMENTS
from minitree.miniscript.node import Fragment, Node, Terminal

HEX_RE = re.compile(r"[0-9a-fA-F]+")
EXTENDED_KEY_PREFIXES = ("xpub", "tpub", "ypub", "zpub", "upub", "vpub")


class KeyKind(Enum):
    COMPRESSED = auto()
    XONLY = auto()
    EXTENDED = auto()
    OTHER = auto()

    def is_key(self) -> bool:
        return self != KeyKind.OTHER


def strip_origin_and_path(key: str) -> str:
    """Get the bare key from a key expression like "[aabbccdd/0']xpub.../<0;1>/*"."""
    splitted_key = key.split("]", maxsplit=1)
    if len(splitted_key) == 2:
        key = splitted_key[1]
    return key.split("/", maxsplit=1)[0]


def classify_key(value: str) -> KeyKind:
    """Tell what kind of public key {value} is, if any.

    This is only a hint for display, anything we can't make sense of is OTHER.
    """
    key = strip_origin_and_path(value)

    if HEX_RE.fullmatch(key) is not None:
        if len(key) == 66:
            try:
                coincurve.PublicKey(bytes.fromhex(key))
                return KeyKind.COMPRESSED
            except ValueError:
                return KeyKind.OTHER
        if len(key) == 64:
            try:
                coincurve.PublicKeyXOnly(bytes.fromhex(key))
                return KeyKind.XONLY
            except ValueError:
                return KeyKind.OTHER
        return KeyKind.OTHER

    if key.startswith(EXTENDED_KEY_PREFIXES):
        try:
            BIP32.from_xpub(key)
            return KeyKind.EXTENDED
        except (ValueError, AssertionError):
            return KeyKind.OTHER

    return KeyKind.OTHER


def abbreviate_key(value: str, keep: int = 6) -> str:
    """Shorten a long key for display, as in "02cc24...8017"."""
    if len(value) <= 2 * keep + 3:
        return value
    return f"{value[:keep]}...{value[-4:]}"


def _key_terminals(node: Node) -> List[str]:
    keys = []
    stack = [node]
    while stack:
        current = stack.pop()
        if isinstance(current, TaprootLeaf):
            try:
                stack.append(current.parse())
            except ValueError:
                # A leaf we can't parse has no key we can point at.
                pass
            continue
        if isinstance(current, TaprootRoot):
            keys.append(current.internal_key)
        elif isinstance(current, Fragment) and current.name in KEY_FRAGMENTS:
            keys += [a.value for a in current.subs if isinstance(a, Terminal)]
        # Reversed so that keys are found in order of apparition.
        stack.extend(reversed(current.children))
    return keys


def extract_keys(node: Node) -> List[str]:
    """Get the list of all keys from this expression, in order of apparition, without duplicates."""
    return list(dict.fromkeys(_key_terminals(node)))


def detect_context(
    node: Node, substitutions: Optional[Mapping[str, str]] = None
) -> Optional[str]:
    """Guess the script context of an expression from the kind of keys it uses.

    :param substitutions: a name to key mapping used to resolve key names.
    :return: "tap" if there are only x-only keys, "segwit" if there are compressed
             keys, None if we can't tell.
    """
    substitutions = substitutions or {}
    kinds = {classify_key(substitutions.get(k, k)) for k in extract_keys(node)}
    if KeyKind.COMPRESSED in kinds:
        return "segwit"
    if KeyKind.XONLY in kinds:
        return "tap"
    return None


def _word_re(word: str) -> re.Pattern:
    # Not \b, as key expressions may start with a '['.
    return re.compile(r"(?<!\w)" + re.escape(word) + r"(?!\w)")


def replace_keys_with_names(text: str, substitutions: Mapping[str, str]) -> str:
    """Replace each key value found in {text} by its name.

    :param substitutions: a name to key mapping. Never modified.
    """
    # Longest keys first, through temporary markers so that a name can't be
    # mistaken for (a part of) another key. Markers have no word character.
    by_length = sorted(substitutions.items(), key=lambda kv: len(kv[1]), reverse=True)
    markers = {}
    for i, (name, value) in enumerate(by_length):
        if len(value) == 0:
            continue
        marker = f"\x00{chr(0xE000 + i)}\x00"
        markers[marker] = name
        text = _word_re(value).sub(marker, text)
    for marker, name in markers.items():
        text = text.replace(marker, name)
    return text


def replace_names_with_keys(text: str, substitutions: Mapping[str, str]) -> str:
    """Replace each key name found in {text} by its value.

    :param substitutions: a name to key mapping. Never modified.
    """
    by_length = sorted(substitutions.items(), key=lambda kv: len(kv[0]), reverse=True)
    for name, value in by_length:
        if len(name) == 0:
            continue
        text = _word_re(name).sub(lambda _: value, text)
    return text
